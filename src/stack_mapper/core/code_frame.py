"""Code frame rendering for error locations.

A code frame is the handful of source lines around an error location with
a gutter of line numbers, a ``>`` on the error line and a ``^`` under the
error column:

      1 | describe('login', () => {
      2 |   it('works', () => {
    > 3 |     cy.get('.btn').clik()
        |                    ^
      4 |   })
      5 | })
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

import structlog

from stack_mapper.interfaces.resolver import SourceMapResolver
from stack_mapper.models.error import CodeFrame, ErrorRecord
from stack_mapper.models.stack import FrameLine
from stack_mapper.utils.errors import CodeFrameError
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()

NEWLINE_PATTERN = re.compile(r"\r\n|[\n\r\u2028\u2029]")
NON_TAB_PATTERN = re.compile(r"[^\t]")

DEFAULT_LINES_ABOVE = 2
DEFAULT_LINES_BELOW = 3


def render_code_frame(
    source: str,
    line: int,
    column: int | None = None,
    lines_above: int = DEFAULT_LINES_ABOVE,
    lines_below: int = DEFAULT_LINES_BELOW,
) -> str:
    """Render the source lines surrounding a location.

    Args:
        source: Full source text
        line: 1-based line to mark
        column: 1-based column to mark; no column marker when 0 or None
        lines_above: Lines of context before the marked line
        lines_below: Lines of context after the marked line

    Returns:
        The rendered frame

    Raises:
        CodeFrameError: If no source lines fall inside the window
    """
    lines = NEWLINE_PATTERN.split(source)

    start = max(line - (lines_above + 1), 0)
    end = min(len(lines), line + lines_below)

    if start >= end:
        raise CodeFrameError(
            f"Line {line} is outside the source ({len(lines)} lines)",
            line=line,
            line_count=len(lines),
        )

    number_width = len(str(end))
    rendered: list[str] = []

    for number, text in enumerate(lines[start:end], start=start + 1):
        gutter = f" {str(number).rjust(number_width)} |"
        code = f" {text}" if text else ""

        if number != line:
            rendered.append(f" {gutter}{code}")
            continue

        marker_line = ""
        if column:
            # Keep tabs so the caret lines up with tab-indented code
            spacing = NON_TAB_PATTERN.sub(" ", text[: max(column - 1, 0)])
            marker_line = f"\n {re.sub(r'[0-9]', ' ', gutter)} {spacing}^"

        rendered.append(f">{gutter}{code}{marker_line}")

    return "\n".join(rendered)


def get_language_from_extension(file_path: str | None) -> str | None:
    """Return the lowercase extension of a path without its dot, or None."""
    if not file_path:
        return None

    extension = os.path.splitext(file_path)[1].lower().replace(".", "", 1)
    return extension or None


def get_code_frame_from_source(
    source_code: str | None,
    frame: FrameLine,
    lines_above: int = DEFAULT_LINES_ABOVE,
    lines_below: int = DEFAULT_LINES_BELOW,
) -> CodeFrame | None:
    """Build a code frame for a stack frame from its source text.

    Args:
        source_code: Full text of the frame's original source file
        frame: Source-mapped frame giving the line and 1-based column
        lines_above: Lines of context before the frame's line
        lines_below: Lines of context after the frame's line

    Returns:
        CodeFrame, or None if there is no source or nothing to render
    """
    if not source_code or frame.line is None:
        return None

    try:
        rendered = render_code_frame(
            source_code,
            frame.line,
            frame.column,
            lines_above=lines_above,
            lines_below=lines_below,
        )
    except CodeFrameError as e:
        log.debug(LogEventNames.CODE_FRAME_UNAVAILABLE, file=frame.relative_file, reason=str(e))
        return None

    if not rendered:
        return None

    return CodeFrame(
        line=frame.line,
        column=frame.column,
        relative_file=frame.relative_file,
        absolute_file=frame.absolute_file,
        frame=rendered,
        language=get_language_from_extension(frame.relative_file),
    )


def get_code_frame(
    error: ErrorRecord | Any,
    resolver: SourceMapResolver,
    lines_above: int = DEFAULT_LINES_ABOVE,
    lines_below: int = DEFAULT_LINES_BELOW,
) -> CodeFrame | Mapping[str, Any] | None:
    """Get the code frame for the first frame of an error that has a file.

    An error that already carries a code frame gets it back unchanged, including
    mapping code frames computed by the host.

    Args:
        error: ErrorRecord, or a host error accepted by ``ErrorRecord.from_error``
        resolver: Source map resolver that supplies source contents
        lines_above: Lines of context before the error line
        lines_below: Lines of context after the error line

    Returns:
        CodeFrame, or None if no frame has a file or its source is unavailable
    """
    record = ErrorRecord.from_error(error)

    if record.code_frame is not None:
        return record.code_frame

    first_frame = next(
        (
            line
            for line in record.parsed_stack or ()
            if isinstance(line, FrameLine) and line.has_file
        ),
        None,
    )
    if first_frame is None or first_frame.file_url is None:
        return None

    source_code = resolver.get_source_contents(first_frame.file_url, first_frame.relative_file)
    if source_code is None:
        log.debug(
            LogEventNames.CODE_FRAME_UNAVAILABLE,
            file_url=first_frame.file_url,
            relative_file=first_frame.relative_file,
            reason="no source contents",
        )
        return None

    return get_code_frame_from_source(
        source_code,
        first_frame,
        lines_above=lines_above,
        lines_below=lines_below,
    )
