"""Data models for parsed stack traces."""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class SourcePosition:
    """A location reported by a source map resolver.

    ``line`` is 1-based, ``column`` is 0-based.
    """

    file: str
    line: int
    column: int


@dataclass(frozen=True)
class FrameFields:
    """Location fields read from a single stack frame line."""

    function_name: str
    file: str | None
    line: int | None
    column: int | None  # 0-based, as the engine reported it
    mapped: bool = False  # True once resolved to an original source position


@dataclass(frozen=True)
class MessageLine:
    """A stack line that is part of the error message."""

    message: str
    whitespace: str = ""


@dataclass(frozen=True)
class FrameLine:
    """A stack frame mapped (when possible) to its original source."""

    function_name: str
    file_url: str | None  # Generated (bundled) file
    relative_file: str | None  # Original source file
    absolute_file: str | None
    line: int | None
    column: int | None  # 1-based, ready for display
    whitespace: str = ""

    @property
    def has_file(self) -> bool:
        """Whether the frame points at a generated file we can look up."""
        return bool(self.file_url)


ParsedLine: TypeAlias = MessageLine | FrameLine


@dataclass(frozen=True)
class SourceStack:
    """Parsed lines of a stack plus the reconstructed, source-mapped text."""

    parsed: tuple[ParsedLine, ...]
    source_mapped: str

    @property
    def frames(self) -> tuple[FrameLine, ...]:
        """Only the frame entries, in stack order."""
        return tuple(line for line in self.parsed if isinstance(line, FrameLine))
