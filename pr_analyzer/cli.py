"""Command-line entry point for the PR complexity analyzer."""

import argparse
import logging
import os
import re
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .analyzer import PRComplexityAnalyzer
from .api_client import GitHubAPIClient
from .collector import GitHubPullRequestSource, GitRevisionSource, UnifiedDiffSource
from .config import CONFIG_ENV_VAR, load_config
from .errors import EXIT_OK, AnalyzerError, NotFoundError
from .output import OUTPUT_FORMATS, ReportFormatter

GITHUB_PR_RE = re.compile(r'^(?P<repo>[\w.-]+/[\w.-]+)#(?P<number>\d+)$')


def configure_logging(verbose: bool = False):
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    default_level = 'INFO' if verbose else 'WARNING'
    log_level = os.environ.get('LOG_LEVEL', default_level).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pr-analyzer',
        description="Score the complexity of a changeset and suggest reviewers."
    )
    parser.add_argument('base', nargs='?', help="Base git revision to diff from")
    parser.add_argument('head', nargs='?', help="Head git revision (default: working tree)")
    parser.add_argument('--repo-path', default='.', help="Git repository to diff in (default: .)")
    parser.add_argument('--diff-file', help="Read a pre-computed unified diff from this file")
    parser.add_argument('--stdin', action='store_true', help="Read a unified diff from standard input")
    parser.add_argument('--github-pr', metavar='OWNER/REPO#N', help="Analyze a GitHub pull request")
    parser.add_argument('--config', help=f"JSON configuration file (default: ${CONFIG_ENV_VAR})")
    parser.add_argument('--format', dest='output_format', choices=OUTPUT_FORMATS, default='text',
                        help="Report format (default: text)")
    parser.add_argument('--color', action='store_true', help="Use ANSI colors in text output")
    parser.add_argument('--exclude-generated', action='store_true',
                        help="Skip lockfiles, minified bundles and build output (default: $EXCLUDE_GENERATED_FILES)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log progress to stderr")
    return parser


def build_source(args: argparse.Namespace, parser: argparse.ArgumentParser):
    """Pick the diff source from the parsed arguments."""
    chosen = [name for name, value in (
        ('--diff-file', args.diff_file),
        ('--stdin', args.stdin),
        ('--github-pr', args.github_pr),
        ('BASE', args.base),
    ) if value]
    if len(chosen) != 1:
        parser.error("specify exactly one of BASE [HEAD], --diff-file, --stdin or --github-pr")

    if args.diff_file:
        return UnifiedDiffSource.from_file(args.diff_file)
    if args.stdin:
        return UnifiedDiffSource(sys.stdin.read(), name='<stdin>')
    if args.github_pr:
        match = GITHUB_PR_RE.match(args.github_pr.strip())
        if not match:
            raise NotFoundError(args.github_pr, "expected OWNER/REPO#NUMBER")
        return GitHubPullRequestSource(
            match.group('repo'),
            int(match.group('number')),
            GitHubAPIClient(os.environ.get('GITHUB_TOKEN')),
        )
    return GitRevisionSource(args.base, args.head, repo_path=args.repo_path)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    exclude_generated_files = args.exclude_generated or \
        os.environ.get('EXCLUDE_GENERATED_FILES', 'false').lower() in ('true', '1', 'yes')

    try:
        # Configuration and formatter are validated before any diff is read
        config = load_config(args.config)
        formatter = ReportFormatter(args.output_format, use_color=args.color)

        source = build_source(args, parser)
        report = PRComplexityAnalyzer(config, exclude_generated_files).analyze(source)
        formatter.print_report(report)
    except AnalyzerError as e:
        logging.error(f"{type(e).__name__}: {e}")
        return e.exit_code

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
