"""Exception hierarchy for stack mapping.

The public pipeline never raises for malformed stacks or missing sources;
these exceptions are raised internally (and caught where the pipeline
degrades to best-effort output) or by the configuration layer.
"""


class StackMapperError(Exception):
    """Base exception for all stack mapper errors."""


class CodeFrameError(StackMapperError):
    """A code frame could not be rendered for the requested location.

    Attributes:
        line: Requested 1-based line
        line_count: Number of lines in the source
    """

    def __init__(self, message: str, line: int | None = None, line_count: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.line_count = line_count


class ConfigError(StackMapperError, ValueError):
    """Configuration is inconsistent."""
