"""Parser for JavaScript stack traces.

This module classifies stack lines and parses frame lines into structured
fields. It supports:
- Chromium frames (``at fn (file:12:5)``, ``at file:12:5``)
- Firefox and Safari frames (``fn@file:12:5``, ``@file:12:5``)
- eval frames from both dialects
- Multi-line error messages ahead of the first frame

A single tolerant grammar decides whether a line is a frame; the dialect
tag only selects how the location is pulled out of it.
"""

from __future__ import annotations

import re
from enum import StrEnum

import structlog

from stack_mapper.models.stack import FrameFields
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()

UNKNOWN_FUNCTION = "<unknown>"

# Any line ending in :<line>:<column>, optionally inside parentheses
STACK_LINE_PATTERN = re.compile(r"^\s*(at )?.*@?\(?.*:\d+:\d+\)?$")
WHITESPACE_PATTERN = re.compile(r"^(\s*)\S*")
FUNCTION_EXTRAS_PATTERN = re.compile(r"(/<|</<)$")

CHROMIUM_FRAME_PATTERN = re.compile(r"^\s*at .*(\S+:\d+|\(native\))")
LOCATION_PATTERN = re.compile(r"(.+?)(?::(\d+))?(?::(\d+))?$")

# Chromium: "at eval (eval at fn (file:1:2), <anonymous>:1:1)"
CHROMIUM_EVAL_WRAPPER = re.compile(r"(\(eval at [^()]*)|(,.*$)")
CHROMIUM_LOCATION = re.compile(r" (\(.+\)$)")
CHROMIUM_KEYWORD = re.compile(r"^.*?\s+")
CHROMIUM_PSEUDO_FILES = frozenset({"eval", "<anonymous>"})

# Firefox: "fn@file line 10 > eval:1:1" or "fn@file line 10 > eval line 2 > eval:1:1"
FIREFOX_EVAL_CHAIN = re.compile(r" line (\d+)(?: > eval line \d+)* > eval:\d+:\d+")
FIREFOX_FUNCTION_NAME = re.compile(r'((.*".+"[^@]*)?[^@]*)(?:@)')
SAFARI_NATIVE_CODE = re.compile(r"^(eval@)?(\[native code\])?$")


class StackDialect(StrEnum):
    """Stack frame syntax families."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"


class SplitState(StrEnum):
    """States of the message/frame splitter."""

    MESSAGE = "message"
    FRAMES = "frames"


def is_frame_line(line: object) -> bool:
    """Check if a line of stack text is a frame line.

    Args:
        line: A single line of a stack

    Returns:
        True if the line matches the frame grammar, False otherwise
    """
    if not isinstance(line, str):
        return False
    return STACK_LINE_PATTERN.match(line) is not None


def get_whitespace(line: str | None) -> str:
    """Return the literal leading whitespace of a line."""
    if not line:
        return ""

    match = WHITESPACE_PATTERN.match(line)
    return match.group(1) if match else ""


class StackSplitter:
    """Two-state automaton separating message lines from frame lines.

    The splitter starts in ``MESSAGE``. The first line matching the frame
    grammar moves it to ``FRAMES`` and it never leaves that state, so
    lines after the first frame are kept as frames even if they do not
    match the grammar themselves.

    Example:
        splitter = StackSplitter()
        for line in stack.split("\\n"):
            splitter.feed(line)
        messages, frames = splitter.message_lines, splitter.frame_lines
    """

    def __init__(self) -> None:
        """Initialize the splitter in the MESSAGE state."""
        self.state = SplitState.MESSAGE
        self.message_lines: list[str] = []
        self.frame_lines: list[str] = []

    def feed(self, line: str) -> SplitState:
        """Classify one line and return the state it was filed under."""
        if self.state is SplitState.MESSAGE and is_frame_line(line):
            self.state = SplitState.FRAMES

        if self.state is SplitState.FRAMES:
            self.frame_lines.append(line)
        else:
            self.message_lines.append(line)

        return self.state


def split_stack(stack: str | None) -> tuple[list[str], list[str]]:
    """Split a stack into its message lines and its frame lines.

    Args:
        stack: Newline-delimited stack text

    Returns:
        Tuple of (message_lines, frame_lines); together they hold every
        line of the stack, in order. Non-string input yields two empty lists.
    """
    if not isinstance(stack, str):
        return [], []

    splitter = StackSplitter()
    for line in stack.split("\n"):
        splitter.feed(line)

    return splitter.message_lines, splitter.frame_lines


def detect_dialect(line: str) -> StackDialect:
    """Detect which engine's frame syntax a line uses."""
    if CHROMIUM_FRAME_PATTERN.match(line):
        return StackDialect.CHROMIUM
    return StackDialect.FIREFOX


def clean_function_name(function_name: object) -> str:
    """Strip wrapper suffixes from a function name.

    Firefox marks functions nested in anonymous wrappers with trailing
    ``/<`` or ``</<``. Missing names become ``<unknown>``.
    """
    if not isinstance(function_name, str) or not function_name:
        return UNKNOWN_FUNCTION
    return FUNCTION_EXTRAS_PATTERN.sub("", function_name)


def _extract_location(url_like: str) -> tuple[str | None, int | None, int | None]:
    """Split ``file:line:column`` into its parts."""
    if ":" not in url_like:
        return (url_like or None, None, None)

    match = LOCATION_PATTERN.match(url_like.replace("(", "").replace(")", ""))
    if not match:
        return (None, None, None)

    line = match.group(2)
    column = match.group(3)
    return (
        match.group(1),
        int(line) if line else None,
        int(column) if column else None,
    )


def _parse_chromium(line: str) -> tuple[str | None, str | None, int | None, int | None]:
    """Read (function, file, line, column) from a Chromium frame."""
    if "(eval " in line:
        line = CHROMIUM_EVAL_WRAPPER.sub("", line.replace("eval code", "eval"))

    # Drop the leading "at " keyword
    sanitized = CHROMIUM_KEYWORD.sub("", line.lstrip().replace("(eval code", "("), count=1)

    location = CHROMIUM_LOCATION.search(sanitized)
    if location:
        sanitized = sanitized.replace(location.group(0), "", 1)

    file, line_number, column = _extract_location(location.group(1) if location else sanitized)
    function_name = sanitized if location and sanitized else None

    if file in CHROMIUM_PSEUDO_FILES:
        file = None

    return function_name, file, line_number, column


def _parse_firefox(line: str) -> tuple[str | None, str | None, int | None, int | None]:
    """Read (function, file, line, column) from a Firefox or Safari frame."""
    line = line.lstrip()

    if " > eval" in line:
        line = FIREFOX_EVAL_CHAIN.sub(r":\1", line)

    if "@" not in line and ":" not in line:
        return line or None, None, None, None

    match = FIREFOX_FUNCTION_NAME.search(line)
    function_name = match.group(1) if match and match.group(1) else None

    file, line_number, column = _extract_location(FIREFOX_FUNCTION_NAME.sub("", line, count=1))
    return function_name, file, line_number, column


def parse_frame_line(line: str) -> FrameFields | None:
    """Parse a single stack frame line.

    Args:
        line: A line of stack text

    Returns:
        FrameFields with the function name, file, line and column as the
        engine reported them, or None if the line is not a frame line
    """
    if not is_frame_line(line):
        return None

    dialect = detect_dialect(line)
    if dialect == StackDialect.CHROMIUM:
        function_name, file, line_number, column = _parse_chromium(line)
    else:
        if SAFARI_NATIVE_CODE.match(line.strip()):
            return None
        function_name, file, line_number, column = _parse_firefox(line)

    if file is None and line_number is None:
        log.debug(LogEventNames.FRAME_UNPARSEABLE, dialect=str(dialect))
        return None

    return FrameFields(
        function_name=clean_function_name(function_name),
        file=file,
        line=line_number,
        column=column,
    )
