"""Map generated stack frames back to their original sources.

Each line of a stack is parsed, frame lines are resolved through a
``SourceMapResolver`` and the stack text is rebuilt from the results.
Lines that cannot be parsed are kept verbatim as message lines and frames
that cannot be resolved keep their generated location.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import structlog

from stack_mapper.core.stack_parser import get_whitespace, parse_frame_line
from stack_mapper.interfaces.resolver import SourceMapResolver
from stack_mapper.models.stack import (
    FrameFields,
    FrameLine,
    MessageLine,
    ParsedLine,
    SourcePosition,
    SourceStack,
)
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()

UNKNOWN_FILE = "<unknown>"

# Evaluator names that stand for running a test body
FUNCTION_NAME_REWRITES: Mapping[str, str] = MappingProxyType({"Context.eval": "Test.run"})


def map_to_source(
    generated: FrameFields,
    resolver: SourceMapResolver,
    rewrites: Mapping[str, str] = FUNCTION_NAME_REWRITES,
) -> FrameFields:
    """Resolve a generated frame to its original source position.

    Args:
        generated: Frame fields as parsed from the stack
        resolver: Source map resolver to query
        rewrites: Function names to replace once the frame is resolved

    Returns:
        FrameFields with ``mapped=True`` and the original file, line and
        0-based column, or ``generated`` unchanged if it cannot be resolved
    """
    if not generated.file or generated.line is None:
        return generated

    position = SourcePosition(
        file=generated.file,
        line=generated.line,
        column=generated.column or 0,
    )
    source = resolver.get_source_position(generated.file, position)

    if source is None:
        log.debug(
            LogEventNames.SOURCE_POSITION_UNRESOLVED,
            file=generated.file,
            line=generated.line,
            column=generated.column,
        )
        return generated

    return FrameFields(
        function_name=rewrites.get(generated.function_name, generated.function_name),
        file=source.file,
        line=source.line,
        column=source.column,
        mapped=True,
    )


def get_source_details_for_line(
    line: str,
    resolver: SourceMapResolver,
    project_root: str | Path = "",
    rewrites: Mapping[str, str] = FUNCTION_NAME_REWRITES,
) -> ParsedLine:
    """Parse and map a single line of a stack.

    Args:
        line: One line of stack text
        resolver: Source map resolver to query
        project_root: Directory that relative source paths are joined onto
        rewrites: Function names to replace on resolved frames

    Returns:
        MessageLine if the line is not a frame, otherwise a FrameLine whose
        column is 1-based when the frame was resolved
    """
    whitespace = get_whitespace(line)
    generated = parse_frame_line(line)

    if generated is None:
        return MessageLine(message=line[len(whitespace) :], whitespace=whitespace)

    source = map_to_source(generated, resolver, rewrites)

    column = source.column
    if source.mapped and column is not None:
        # Resolver columns are 0-based; editors and code frames count from 1
        column += 1

    return FrameLine(
        function_name=source.function_name,
        file_url=generated.file,
        relative_file=source.file,
        absolute_file=_join_project_path(project_root, source.file),
        line=source.line,
        column=column,
        whitespace=whitespace,
    )


def _join_project_path(project_root: str | Path, file: str | None) -> str | None:
    if not file:
        return None
    return os.path.normpath(os.path.join(str(project_root), file))


def reconstruct_stack(parsed_stack: Iterable[ParsedLine]) -> str:
    """Rebuild stack text from parsed lines.

    Args:
        parsed_stack: Parsed lines in stack order

    Returns:
        Newline-joined stack with every frame in ``at fn (file:line:column)``
        form and message lines restored verbatim
    """
    lines: list[str] = []

    for parsed_line in parsed_stack:
        if isinstance(parsed_line, MessageLine):
            lines.append(f"{parsed_line.whitespace}{parsed_line.message}")
            continue

        file = parsed_line.relative_file or UNKNOWN_FILE
        lines.append(
            f"{parsed_line.whitespace}at {parsed_line.function_name} "
            f"({file}:{parsed_line.line}:{parsed_line.column})"
        )

    return "\n".join(lines)


def get_source_stack(
    stack: object,
    resolver: SourceMapResolver,
    project_root: str | Path = "",
    rewrites: Mapping[str, str] = FUNCTION_NAME_REWRITES,
) -> SourceStack | None:
    """Parse, map and reconstruct a whole stack.

    Args:
        stack: Stack text of an error
        resolver: Source map resolver to query
        project_root: Directory that relative source paths are joined onto
        rewrites: Function names to replace on resolved frames

    Returns:
        SourceStack with the parsed lines and the source-mapped text, or
        None if ``stack`` is not a string
    """
    if not isinstance(stack, str):
        log.debug(LogEventNames.SOURCE_STACK_SKIPPED, stack_type=type(stack).__name__)
        return None

    parsed = tuple(
        get_source_details_for_line(line, resolver, project_root, rewrites)
        for line in stack.split("\n")
    )

    return SourceStack(parsed=parsed, source_mapped=reconstruct_stack(parsed))

