"""File filtering utilities for excluding generated files from scoring."""

import fnmatch
import logging
from typing import List, Optional, Sequence, Tuple

from .models import ChangedFile, ChangeSet


# Lockfiles, minified bundles, build output and codegen artifacts
GENERATED_FILE_PATTERNS = (
    '*.lock',
    '*-lock.json',
    '*-lock.yaml',
    '*.min.js',
    '*.min.css',
    '*.bundle.js',
    '*.map',
    'dist/*',
    'build/*',
    'target/*',
    '*.generated.*',
    '*_pb2.py',
    '*.pb.go',
)


def match_pattern(path: str, pattern: str) -> bool:
    """Check if a path matches a glob pattern (supports * wildcards).

    Patterns without a directory part also match the basename, so
    'yarn.lock' matches 'web/yarn.lock'.

    Args:
        path: The file path to check
        pattern: The pattern to match against

    Returns:
        True if the path matches the pattern, False otherwise
    """
    if fnmatch.fnmatchcase(path, pattern):
        return True
    if '/' not in pattern:
        return fnmatch.fnmatchcase(path.rsplit('/', 1)[-1], pattern)
    return False


class FileFilter:
    """Handles filtering of generated files out of a changeset."""

    def __init__(self, excluded_file_patterns: Optional[Sequence[str]] = None):
        """Initialize the file filter.

        Args:
            excluded_file_patterns: File patterns to exclude (nothing is excluded if empty)
        """
        self.excluded_file_patterns = list(excluded_file_patterns or [])

    def is_excluded(self, path: str) -> bool:
        """Check if a file should be excluded based on patterns."""
        return any(
            match_pattern(path, pattern)
            for pattern in self.excluded_file_patterns
        )

    def apply(self, change_set: ChangeSet) -> Tuple[ChangeSet, List[ChangedFile]]:
        """Split a changeset into kept and excluded files.

        Args:
            change_set: The collected changeset

        Returns:
            Tuple of (changeset without excluded files, excluded files in changeset order)
        """
        if not self.excluded_file_patterns:
            return change_set, []

        kept = []
        excluded = []
        for changed_file in change_set:
            if self.is_excluded(changed_file.path):
                excluded.append(changed_file)
                logging.debug(f"Excluding file: {changed_file.path} "
                              f"(+{changed_file.lines_added}/-{changed_file.lines_removed})")
            else:
                kept.append(changed_file)

        if excluded:
            excluded_lines = sum(changed_file.lines_changed for changed_file in excluded)
            logging.info(f"Excluded {len(excluded)} generated file(s) ({excluded_lines:,} lines)")

        return ChangeSet(kept), excluded
