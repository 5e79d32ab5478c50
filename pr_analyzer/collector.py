"""Diff stat collection from git revisions, diff text and GitHub pull requests."""

import logging
import subprocess
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

import requests

from .api_client import GitHubAPIClient
from .diff_parser import parse_numstat, parse_unified_diff
from .errors import NotFoundError
from .models import ChangedFile, ChangeSet


def build_change_set(changed_files: Iterable[ChangedFile]) -> ChangeSet:
    """Build a ChangeSet, merging entries reported twice for the same path.

    The merged entry keeps the position of the first occurrence.
    """
    merged: Dict[str, ChangedFile] = OrderedDict()
    for changed_file in changed_files:
        previous = merged.get(changed_file.path)
        if previous is None:
            merged[changed_file.path] = changed_file
            continue

        logging.debug(f"Merging duplicate diff entry for {changed_file.path}")
        if previous.is_binary or changed_file.is_binary:
            merged[changed_file.path] = ChangedFile(path=changed_file.path, is_binary=True)
        else:
            merged[changed_file.path] = ChangedFile(
                path=changed_file.path,
                lines_added=previous.lines_added + changed_file.lines_added,
                lines_removed=previous.lines_removed + changed_file.lines_removed,
            )
    return ChangeSet(tuple(merged.values()))


class GitRevisionSource:
    """Diff between two git revisions (or a revision and the working tree)."""

    def __init__(self, base: str, head: Optional[str] = None, repo_path: str = '.'):
        self.base = base
        self.head = head
        self.repo_path = repo_path

    def describe(self) -> str:
        return f"{self.base}..{self.head}" if self.head else self.base

    def _command(self) -> List[str]:
        cmd = ['git', 'diff', '--numstat', '-z', '--no-renames', self.base]
        if self.head:
            cmd.append(self.head)
        # Revisions only, never paths
        cmd.append('--')
        return cmd

    def collect(self) -> ChangeSet:
        for revision in (self.base, self.head):
            if revision and revision.startswith('-'):
                raise NotFoundError(self.describe(), f"invalid revision {revision!r}")

        cmd = self._command()
        logging.debug(f"Running: {' '.join(cmd)} (cwd={self.repo_path})")
        try:
            result = subprocess.run(cmd, cwd=self.repo_path, capture_output=True,
                                    encoding='utf-8', errors='replace')
        except OSError as e:
            raise NotFoundError(self.describe(), f"could not run git: {e}") from e

        if result.returncode != 0:
            raise NotFoundError(self.describe(), result.stderr.strip() or f"git exited with {result.returncode}")

        try:
            return build_change_set(parse_numstat(result.stdout))
        except ValueError as e:
            raise NotFoundError(self.describe(), str(e)) from e


class UnifiedDiffSource:
    """Pre-computed unified diff text, e.g. a saved `git diff` or a CI artifact."""

    def __init__(self, diff_text: str, name: str = '<diff>'):
        self.diff_text = diff_text
        self.name = name

    @classmethod
    def from_file(cls, path: str) -> 'UnifiedDiffSource':
        """Read diff text from a file.

        Raises:
            NotFoundError: If the file does not exist or cannot be read
        """
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return cls(f.read(), name=path)
        except OSError as e:
            raise NotFoundError(path, f"could not read diff file: {e.strerror or e}") from e

    def describe(self) -> str:
        return self.name

    def collect(self) -> ChangeSet:
        if not self.diff_text.strip():
            return ChangeSet()

        try:
            changed_files = parse_unified_diff(self.diff_text)
        except ValueError as e:
            raise NotFoundError(self.describe(), str(e)) from e

        if not changed_files:
            raise NotFoundError(self.describe(), "no file sections found in diff text")
        return build_change_set(changed_files)


class GitHubPullRequestSource:
    """Changed files of a GitHub pull request, fetched through the REST API."""

    def __init__(self, repo: str, pr_number: int, api_client: Optional[GitHubAPIClient] = None):
        self.repo = repo
        self.pr_number = pr_number
        self.api_client = api_client or GitHubAPIClient()

    def describe(self) -> str:
        return f"{self.repo}#{self.pr_number}"

    @staticmethod
    def _is_binary(file_entry: Dict) -> bool:
        # GitHub omits the patch for binary files, but also for pure renames/deletes
        if 'patch' in file_entry or file_entry.get('changes', 0):
            return False
        return file_entry.get('status') not in ('renamed', 'removed')

    def _to_changed_file(self, file_entry: Dict) -> ChangedFile:
        path = file_entry['filename']
        if self._is_binary(file_entry):
            return ChangedFile(path=path, is_binary=True)
        return ChangedFile(
            path=path,
            lines_added=file_entry.get('additions', 0),
            lines_removed=file_entry.get('deletions', 0),
        )

    def collect(self) -> ChangeSet:
        try:
            files = self.api_client.get_pull_request_files(self.repo, self.pr_number)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                raise NotFoundError(self.describe(), "pull request not found") from e
            raise NotFoundError(self.describe(), f"GitHub API error: {e}") from e
        except requests.RequestException as e:
            raise NotFoundError(self.describe(), f"request failed: {e}") from e

        try:
            return build_change_set(self._to_changed_file(entry) for entry in files)
        except (KeyError, ValueError) as e:
            raise NotFoundError(self.describe(), f"unexpected file entry: {e}") from e


class DiffStatCollector:
    """Gathers per-file change metrics from a diff source."""

    def __init__(self, source):
        """Initialize the collector.

        Args:
            source: Any object with collect() -> ChangeSet and describe() -> str
        """
        self.source = source

    def collect(self) -> ChangeSet:
        """Collect the changeset.

        Raises:
            NotFoundError: If the source cannot be resolved to a diff
        """
        logging.info(f"Collecting diff stats for {self.source.describe()}")
        change_set = self.source.collect()
        binary_count = sum(1 for changed_file in change_set if changed_file.is_binary)
        logging.info(f"Collected {len(change_set)} changed file(s) "
                     f"({change_set.total_lines_changed:,} lines, {binary_count} binary)")
        return change_set
