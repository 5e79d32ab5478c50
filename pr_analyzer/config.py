"""
Configuration management for the PR complexity analyzer.

Handles loading and validating the weighting policy, tier thresholds,
risky path patterns and the path-prefix ownership map from a JSON file.
Validation is complete before any changeset is processed.
"""

import json
import logging
import math
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import ConfigError
from .models import ReviewerSuggestion

# Environment variable holding the config file path
CONFIG_ENV_VAR = 'PR_ANALYZER_CONFIG'

DEFAULT_FILE_COUNT_WEIGHT = 1.0
DEFAULT_LINE_COUNT_WEIGHT = 0.1
DEFAULT_MAX_LINES_PER_FILE = 400
DEFAULT_LARGE_FILE_COUNT = 20
DEFAULT_LARGE_LINE_COUNT = 500
DEFAULT_RISKY_PATH_WEIGHT = 2.0
DEFAULT_MEDIUM_THRESHOLD = 50.0
DEFAULT_HIGH_THRESHOLD = 200.0

KNOWN_KEYS = {
    'file_count_weight',
    'line_count_weight',
    'max_lines_per_file',
    'large_file_count',
    'large_line_count',
    'risky_path_patterns',
    'risky_path_weight',
    'tier_thresholds',
    'owners',
    'excluded_file_patterns',
}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Validated, immutable analyzer configuration."""
    file_count_weight: float = DEFAULT_FILE_COUNT_WEIGHT
    line_count_weight: float = DEFAULT_LINE_COUNT_WEIGHT
    max_lines_per_file: int = DEFAULT_MAX_LINES_PER_FILE
    large_file_count: int = DEFAULT_LARGE_FILE_COUNT
    large_line_count: int = DEFAULT_LARGE_LINE_COUNT
    risky_path_patterns: Tuple[Tuple[str, float], ...] = ()
    medium_threshold: float = DEFAULT_MEDIUM_THRESHOLD
    high_threshold: float = DEFAULT_HIGH_THRESHOLD
    owners: Tuple[ReviewerSuggestion, ...] = ()
    excluded_file_patterns: Tuple[str, ...] = ()

    def __post_init__(self):
        _check_non_negative('file_count_weight', self.file_count_weight)
        _check_non_negative('line_count_weight', self.line_count_weight)
        _check_non_negative('max_lines_per_file', self.max_lines_per_file, integer=True)
        _check_non_negative('large_file_count', self.large_file_count, integer=True)
        _check_non_negative('large_line_count', self.large_line_count, integer=True)
        for pattern, weight in self.risky_path_patterns:
            _check_non_negative(f"risky_path_patterns[{pattern!r}]", weight)
        _check_non_negative('tier_thresholds.medium', self.medium_threshold)
        _check_non_negative('tier_thresholds.high', self.high_threshold)
        if self.medium_threshold >= self.high_threshold:
            raise ConfigError(
                'tier_thresholds',
                f"medium ({self.medium_threshold}) must be lower than high ({self.high_threshold})"
            )

    @classmethod
    def from_dict(cls, data: Dict) -> 'AnalyzerConfig':
        """Build a configuration from a parsed JSON document.

        Args:
            data: Mapping of configuration keys to values

        Returns:
            The validated configuration

        Raises:
            ConfigError: If any key is unknown, mistyped or out of range
        """
        if not isinstance(data, dict):
            raise ConfigError('<root>', f"expected a JSON object, got {type(data).__name__}")

        unknown = sorted(set(data) - KNOWN_KEYS)
        if unknown:
            raise ConfigError(unknown[0], "unknown configuration key")

        kwargs = {}
        for key in ('file_count_weight', 'line_count_weight'):
            if key in data:
                kwargs[key] = float(_require_number(key, data[key]))
        for key in ('max_lines_per_file', 'large_file_count', 'large_line_count'):
            if key in data:
                kwargs[key] = _require_int(key, data[key])

        risky_weight = DEFAULT_RISKY_PATH_WEIGHT
        if 'risky_path_weight' in data:
            risky_weight = float(_require_number('risky_path_weight', data['risky_path_weight']))
            _check_non_negative('risky_path_weight', risky_weight)
        if 'risky_path_patterns' in data:
            kwargs['risky_path_patterns'] = _parse_risky_patterns(data['risky_path_patterns'], risky_weight)

        if 'tier_thresholds' in data:
            medium, high = _parse_thresholds(data['tier_thresholds'])
            kwargs['medium_threshold'] = medium
            kwargs['high_threshold'] = high

        if 'owners' in data:
            kwargs['owners'] = _parse_owners(data['owners'])

        if 'excluded_file_patterns' in data:
            kwargs['excluded_file_patterns'] = _parse_string_list(
                'excluded_file_patterns', data['excluded_file_patterns']
            )

        return cls(**kwargs)


def load_config(config_path: Optional[str] = None) -> AnalyzerConfig:
    """Load and validate the analyzer configuration.

    Falls back to the PR_ANALYZER_CONFIG environment variable when no path
    is given, and to the built-in defaults when neither is set.

    Args:
        config_path: Path to the JSON configuration file

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file is missing, is not valid JSON or fails validation
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        logging.info("No configuration file given, using default weights")
        return AnalyzerConfig()

    if not os.path.exists(config_path):
        raise ConfigError(config_path, "configuration file not found")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(config_path, f"invalid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(config_path, f"could not read file: {e}") from e

    config = AnalyzerConfig.from_dict(data)
    logging.info(
        f"Loaded config from {config_path} "
        f"({len(config.risky_path_patterns)} risky pattern(s), {len(config.owners)} owner prefix(es))"
    )
    return config


def _require_number(key: str, value) -> float:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(key, f"must be a number (got {value!r})")
    if not math.isfinite(value):
        raise ConfigError(key, f"must be a finite number (got {value!r})")
    return value


def _require_int(key: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(key, f"must be an integer (got {value!r})")
    return value


def _check_non_negative(key: str, value, integer: bool = False):
    if integer:
        _require_int(key, value)
    else:
        _require_number(key, value)
    if value < 0:
        raise ConfigError(key, f"must be >= 0 (got {value})")


def _parse_string_list(key: str, value) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(key, f"must be a list of strings (got {value!r})")
    for item in value:
        if not isinstance(item, str) or not item:
            raise ConfigError(key, f"entries must be non-empty strings (got {item!r})")
    return tuple(value)


def _parse_risky_patterns(value, default_weight: float) -> Tuple[Tuple[str, float], ...]:
    """Accept either {pattern: weight} or a plain list of patterns."""
    key = 'risky_path_patterns'
    if isinstance(value, list):
        patterns = _parse_string_list(key, value)
        return tuple((pattern, default_weight) for pattern in patterns)

    if not isinstance(value, dict):
        raise ConfigError(key, f"must be an object or a list (got {value!r})")

    parsed = []
    for pattern, weight in value.items():
        if not pattern:
            raise ConfigError(key, "patterns must be non-empty strings")
        entry_key = f"{key}[{pattern!r}]"
        parsed.append((pattern, float(_require_number(entry_key, weight))))
    return tuple(parsed)


def _parse_thresholds(value) -> Tuple[float, float]:
    key = 'tier_thresholds'
    if not isinstance(value, dict):
        raise ConfigError(key, f"must be an object with 'medium' and 'high' (got {value!r})")

    unknown = sorted(set(value) - {'medium', 'high'})
    if unknown:
        raise ConfigError(f"{key}.{unknown[0]}", "unknown threshold name")

    medium = float(_require_number(f"{key}.medium", value.get('medium', DEFAULT_MEDIUM_THRESHOLD)))
    high = float(_require_number(f"{key}.high", value.get('high', DEFAULT_HIGH_THRESHOLD)))
    return medium, high


def _parse_owners(value) -> Tuple[ReviewerSuggestion, ...]:
    key = 'owners'
    if not isinstance(value, dict):
        raise ConfigError(key, f"must be an object mapping path prefixes to owner lists (got {value!r})")

    suggestions = []
    for prefix, owners in value.items():
        if not prefix:
            raise ConfigError(key, "path prefixes must be non-empty strings")
        owner_list = _parse_string_list(f"{key}[{prefix!r}]", owners)
        suggestions.append(ReviewerSuggestion(path_prefix=prefix, owners=frozenset(owner_list)))
    return tuple(suggestions)
