"""PR Complexity Analyzer - scores changesets and suggests reviewers."""

from .models import ChangedFile, ChangeSet, ComplexityScore, Report, ReviewerSuggestion, Tier
from .errors import AnalyzerError, ConfigError, FormatError, NotFoundError
from .config import AnalyzerConfig, load_config
from .file_filters import FileFilter, GENERATED_FILE_PATTERNS
from .api_client import GitHubAPIClient
from .collector import DiffStatCollector, GitRevisionSource, UnifiedDiffSource, GitHubPullRequestSource
from .scorer import ComplexityScorer
from .suggester import ReviewerSuggester
from .output import ReportFormatter
from .analyzer import PRComplexityAnalyzer

__all__ = [
    'ChangedFile',
    'ChangeSet',
    'ComplexityScore',
    'Report',
    'ReviewerSuggestion',
    'Tier',
    'AnalyzerError',
    'ConfigError',
    'FormatError',
    'NotFoundError',
    'AnalyzerConfig',
    'load_config',
    'FileFilter',
    'GENERATED_FILE_PATTERNS',
    'GitHubAPIClient',
    'DiffStatCollector',
    'GitRevisionSource',
    'UnifiedDiffSource',
    'GitHubPullRequestSource',
    'ComplexityScorer',
    'ReviewerSuggester',
    'ReportFormatter',
    'PRComplexityAnalyzer',
]
