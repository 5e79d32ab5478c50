"""Error types raised by the PR complexity analyzer."""

# Process exit codes (argparse keeps 2 for usage errors)
EXIT_OK = 0
EXIT_NOT_FOUND = 3
EXIT_CONFIG_ERROR = 4
EXIT_FORMAT_ERROR = 5


class AnalyzerError(Exception):
    """Base class for all analyzer errors."""

    exit_code = 1


class NotFoundError(AnalyzerError):
    """The changeset (diff, revisions or pull request) could not be resolved."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, identifier: str, detail: str = ''):
        self.identifier = identifier
        self.detail = detail
        message = f"Could not resolve changeset '{identifier}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ConfigError(AnalyzerError):
    """The configuration is missing or invalid."""

    exit_code = EXIT_CONFIG_ERROR

    def __init__(self, key: str, detail: str):
        self.key = key
        self.detail = detail
        super().__init__(f"{key}: {detail}")


class FormatError(AnalyzerError):
    """The report could not be rendered."""

    exit_code = EXIT_FORMAT_ERROR
