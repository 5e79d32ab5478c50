"""Data models for PR complexity analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Tuple


@dataclass(frozen=True)
class ChangedFile:
    """Change metrics for a single file in a changeset."""
    path: str
    lines_added: int = 0
    lines_removed: int = 0
    is_binary: bool = False

    def __post_init__(self):
        if not self.path:
            raise ValueError("ChangedFile path must not be empty")
        if self.lines_added < 0 or self.lines_removed < 0:
            raise ValueError(
                f"Line counts for {self.path} must be >= 0 "
                f"(got +{self.lines_added}/-{self.lines_removed})"
            )
        if self.is_binary and (self.lines_added or self.lines_removed):
            raise ValueError(f"Binary file {self.path} cannot have line counts")

    @property
    def lines_changed(self) -> int:
        return self.lines_added + self.lines_removed


@dataclass(frozen=True)
class ChangeSet:
    """Ordered set of changed files, in the order the diff reported them."""
    files: Tuple[ChangedFile, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, 'files', tuple(self.files))
        seen = set()
        for changed_file in self.files:
            if changed_file.path in seen:
                raise ValueError(f"Duplicate path in changeset: {changed_file.path}")
            seen.add(changed_file.path)

    def __iter__(self) -> Iterator[ChangedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [changed_file.path for changed_file in self.files]

    @property
    def total_lines_changed(self) -> int:
        return sum(changed_file.lines_changed for changed_file in self.files)


class Tier(str, Enum):
    """Coarse complexity bucket."""
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'


@dataclass(frozen=True)
class ComplexityScore:
    """Score derived from a changeset and the weighting configuration."""
    numeric_value: float = 0.0
    tier: Tier = Tier.LOW
    reasons: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReviewerSuggestion:
    """Owners responsible for every path starting with path_prefix."""
    path_prefix: str
    owners: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Report:
    """Result of one analyzer run, rendered and then discarded."""
    score: ComplexityScore
    suggested_owners: FrozenSet[str] = frozenset()
    flagged_files: Tuple[ChangedFile, ...] = ()
    change_set: ChangeSet = field(default_factory=ChangeSet)
    excluded_files: Tuple[ChangedFile, ...] = ()
