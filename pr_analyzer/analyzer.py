"""Main PR complexity analyzer pipeline."""

import logging

from .collector import DiffStatCollector
from .config import AnalyzerConfig
from .file_filters import GENERATED_FILE_PATTERNS, FileFilter
from .models import Report
from .scorer import ComplexityScorer
from .suggester import ReviewerSuggester


class PRComplexityAnalyzer:
    """Runs collector, scorer and suggester over one changeset per call."""

    def __init__(self, config: AnalyzerConfig = None, exclude_generated_files: bool = False):
        """Initialize the analyzer.

        Args:
            config: Validated configuration (defaults are used if None)
            exclude_generated_files: Also drop lockfiles, bundles and build output
                before scoring, on top of the configured exclusions
        """
        self.config = config or AnalyzerConfig()
        excluded_file_patterns = list(self.config.excluded_file_patterns)
        if exclude_generated_files:
            excluded_file_patterns.extend(GENERATED_FILE_PATTERNS)
        self.file_filter = FileFilter(excluded_file_patterns)
        self.scorer = ComplexityScorer(self.config)
        self.suggester = ReviewerSuggester(self.config.owners)

    def analyze(self, source) -> Report:
        """Analyze the changeset behind a diff source.

        Args:
            source: Diff source (see pr_analyzer.collector)

        Returns:
            The report for this changeset

        Raises:
            NotFoundError: If the source cannot be resolved
        """
        change_set = DiffStatCollector(source).collect()
        change_set, excluded = self.file_filter.apply(change_set)

        score = self.scorer.score(change_set)
        owners = self.suggester.suggest(change_set)
        flagged = self.scorer.flag_large_files(change_set)

        if flagged:
            logging.info(f"{len(flagged)} file(s) exceed {self.config.max_lines_per_file} changed lines")

        return Report(
            score=score,
            suggested_owners=owners,
            flagged_files=tuple(flagged),
            change_set=change_set,
            excluded_files=tuple(excluded),
        )
