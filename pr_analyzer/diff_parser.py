"""Parsers turning diff output into per-file change records."""

import logging
import re
from typing import List, Optional

from .models import ChangedFile

HUNK_HEADER_RE = re.compile(r'^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@')
DIFF_GIT_RE = re.compile(r'^diff --git a/(.+) b/(.+)$')
BINARY_FILES_RE = re.compile(r'^Binary files (.+) and (.+) differ$')
DEV_NULL = '/dev/null'


class _FileEntry:
    """Mutable accumulator used while walking a single file section."""

    def __init__(self, old_path: Optional[str] = None, new_path: Optional[str] = None):
        self.old_path = old_path
        self.new_path = new_path
        self.lines_added = 0
        self.lines_removed = 0
        self.has_hunks = False
        self.is_binary = False
        self.is_deleted = False

    @property
    def path(self) -> Optional[str]:
        if self.is_deleted or not self.new_path or self.new_path == DEV_NULL:
            if self.old_path and self.old_path != DEV_NULL:
                return self.old_path
        if self.new_path == DEV_NULL:
            return None
        return self.new_path

    def to_changed_file(self) -> ChangedFile:
        if self.is_binary:
            return ChangedFile(path=self.path, is_binary=True)
        return ChangedFile(
            path=self.path,
            lines_added=self.lines_added,
            lines_removed=self.lines_removed,
        )


def _strip_prefix(path: str) -> str:
    # A tab separates the path from an optional timestamp in `diff -u` output
    path = path.split('\t', 1)[0].strip()
    if path == DEV_NULL:
        return path
    if path.startswith('a/') or path.startswith('b/'):
        return path[2:]
    return path


def parse_unified_diff(diff_text: str) -> List[ChangedFile]:
    """Parse unified diff text into ChangedFile records.

    Handles `git diff` output (with `diff --git` headers) as well as plain
    `diff -u` output that only carries `---`/`+++` headers. Binary files
    are recognised from `Binary files ... differ` lines and `GIT binary patch`
    sections.

    Args:
        diff_text: The raw diff text

    Returns:
        One ChangedFile per file section, in the order they appear
    """
    entries: List[_FileEntry] = []
    current: Optional[_FileEntry] = None
    old_remaining = 0
    new_remaining = 0

    for line in diff_text.splitlines():
        # Hunk body: counts from the @@ header tell where it ends
        if current is not None and (old_remaining > 0 or new_remaining > 0):
            if line.startswith('+'):
                current.lines_added += 1
                new_remaining -= 1
                continue
            if line.startswith('-'):
                current.lines_removed += 1
                old_remaining -= 1
                continue
            if line.startswith(' ') or line == '':
                old_remaining -= 1
                new_remaining -= 1
                continue
            if line.startswith('\\'):
                continue
            # Truncated hunk, fall through to header handling
            old_remaining = new_remaining = 0

        git_header = DIFF_GIT_RE.match(line)
        if git_header:
            current = _FileEntry(git_header.group(1), git_header.group(2))
            entries.append(current)
            continue

        if line.startswith('--- '):
            # Without git headers a '---' line after a hunk starts the next file
            if current is None or current.has_hunks or current.is_binary:
                current = _FileEntry()
                entries.append(current)
            current.old_path = _strip_prefix(line[4:])
            continue

        binary = BINARY_FILES_RE.match(line)
        if binary:
            if current is None or current.has_hunks or current.is_binary:
                current = _FileEntry(_strip_prefix(binary.group(1)), _strip_prefix(binary.group(2)))
                entries.append(current)
            current.is_binary = True
            continue

        if current is None:
            continue

        if line.startswith('+++ '):
            current.new_path = _strip_prefix(line[4:])
            continue

        hunk_header = HUNK_HEADER_RE.match(line)
        if hunk_header:
            current.has_hunks = True
            old_remaining = int(hunk_header.group(1) or 1)
            new_remaining = int(hunk_header.group(2) or 1)
        elif line.startswith('deleted file mode'):
            current.is_deleted = True
        elif line.startswith('GIT binary patch'):
            current.is_binary = True

    changed_files = []
    for entry in entries:
        if not entry.path:
            logging.debug("Skipping diff section without a file path")
            continue
        changed_files.append(entry.to_changed_file())
    return changed_files


def parse_numstat(numstat_text: str) -> List[ChangedFile]:
    """Parse `git diff --numstat` output into ChangedFile records.

    Each record is `<added>\\t<removed>\\t<path>`; binary files report `-` for
    both counts. Records are NUL-terminated when the output comes from
    `--numstat -z`, which also leaves paths unquoted.

    Args:
        numstat_text: The raw numstat output

    Returns:
        One ChangedFile per line, in the order git reported them

    Raises:
        ValueError: If a line is not valid numstat output
    """
    changed_files = []
    records = numstat_text.split("\0") if "\0" in numstat_text else numstat_text.splitlines()
    for line in records:
        if not line.strip():
            continue
        parts = line.split('\t', 2)
        if len(parts) != 3:
            raise ValueError(f"Malformed numstat line: {line!r}")
        added, removed, path = parts
        if added == '-' and removed == '-':
            changed_files.append(ChangedFile(path=path, is_binary=True))
        else:
            changed_files.append(ChangedFile(path=path, lines_added=int(added), lines_removed=int(removed)))
    return changed_files
