"""Complexity scoring for a changeset."""

import logging
from typing import List, Optional, Tuple

from .config import AnalyzerConfig
from .file_filters import match_pattern
from .models import ChangedFile, ChangeSet, ComplexityScore, Tier


class ComplexityScorer:
    """Maps a changeset to a numeric score, a tier and the reasons behind it."""

    def __init__(self, config: AnalyzerConfig):
        self.config = config

    def risky_weight(self, path: str) -> Optional[Tuple[str, float]]:
        """Return (pattern, weight) of the heaviest risky pattern matching path, if any."""
        best = None
        for pattern, weight in self.config.risky_path_patterns:
            if match_pattern(path, pattern) and (best is None or weight > best[1]):
                best = (pattern, weight)
        return best

    def file_contribution(self, changed_file: ChangedFile,
                          risky: Optional[Tuple[str, float]] = None) -> float:
        """Weighted contribution of a single file.

        Args:
            changed_file: The file to weigh
            risky: Matching (pattern, weight) from risky_weight(), if any
        """
        contribution = (self.config.file_count_weight
                        + self.config.line_count_weight * changed_file.lines_changed)
        if risky:
            contribution *= risky[1]
        return contribution

    def tier_for(self, value: float) -> Tier:
        if value < self.config.medium_threshold:
            return Tier.LOW
        if value < self.config.high_threshold:
            return Tier.MEDIUM
        return Tier.HIGH

    def score(self, change_set: ChangeSet) -> ComplexityScore:
        """Score a changeset.

        Args:
            change_set: The files to score

        Returns:
            ComplexityScore with the value, its tier and the contributing factors
        """
        if not change_set:
            return ComplexityScore(numeric_value=0.0, tier=Tier.LOW, reasons=())

        value = 0.0
        risky_reasons: List[str] = []
        for changed_file in change_set:
            risky = self.risky_weight(changed_file.path)
            value += self.file_contribution(changed_file, risky)
            if risky:
                pattern, weight = risky
                risky_reasons.append(f"Risky path {changed_file.path} matches '{pattern}' (x{weight:g})")

        reasons: List[str] = []
        file_count = len(change_set)
        if file_count >= self.config.large_file_count:
            reasons.append(f"Large number of files changed ({file_count})")

        total_lines = change_set.total_lines_changed
        if total_lines >= self.config.large_line_count:
            reasons.append(f"Large number of lines changed ({total_lines:,})")

        reasons.extend(risky_reasons)

        tier = self.tier_for(value)
        logging.info(f"Complexity score {value:.2f} ({tier.value}) from {file_count} file(s), "
                     f"{total_lines:,} line(s)")
        return ComplexityScore(numeric_value=value, tier=tier, reasons=tuple(reasons))

    def flag_large_files(self, change_set: ChangeSet) -> List[ChangedFile]:
        """Files whose changed line count exceeds max_lines_per_file, in changeset order."""
        return [
            changed_file for changed_file in change_set
            if changed_file.lines_changed > self.config.max_lines_per_file
        ]
