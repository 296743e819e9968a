"""Error-level stack helpers.

These functions normalize and inspect the stack carried by an error. They
accept an ``ErrorRecord`` or any host error understood by
``ErrorRecord.from_error`` and return new records instead of mutating
their input.
"""

from __future__ import annotations

from typing import Any

import structlog

from stack_mapper.core.stack_parser import split_stack
from stack_mapper.models.error import ErrorRecord
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()

# Frames added when the runner captures the call site of a spec command
SPEC_FRAME_MARKER = "__getSpecFrameStack"
# Scheme of files served by the test runner itself
INTERNAL_ORIGIN = "cypress://"


def error_to_string(error: ErrorRecord | Any) -> str:
    """Return the textual form of an error, e.g. ``Error: message``."""
    return ErrorRecord.from_error(error).to_string()


def normalize_stack(error: ErrorRecord | Any) -> ErrorRecord:
    """Make sure an error's stack starts with its name and message.

    Chromium stacks start with ``Name: message``; Firefox and Safari stacks
    only hold frames. Stacks whose first line already contains the error's
    first line are left alone, so normalizing twice changes nothing.

    Args:
        error: ErrorRecord or host error

    Returns:
        ErrorRecord whose stack begins with the error's textual form
    """
    record = ErrorRecord.from_error(error)

    err_string = record.to_string()
    err_stack = record.stack or ""
    first_err_line = err_string.split("\n", 1)[0]
    first_stack_line = err_stack.split("\n", 1)[0]

    if first_err_line in first_stack_line:
        return record

    log.debug(LogEventNames.STACK_NORMALIZED, error_name=record.name)
    return record.with_stack(f"{err_string}\n{err_stack}")


def replace_stack(
    error: ErrorRecord | Any,
    new_stack: str,
    spec_frame_marker: str = SPEC_FRAME_MARKER,
) -> ErrorRecord:
    """Replace the frames of an error's stack.

    Errors without a stack keep having none; an upstream step removed it
    on purpose. Otherwise the stack becomes the error's textual form
    followed by the frame lines of ``new_stack``, minus the frames of the
    runner's own call-site capture helper.

    Args:
        error: ErrorRecord or host error
        new_stack: Stack whose frame lines should be used
        spec_frame_marker: Substring identifying call-site capture frames

    Returns:
        ErrorRecord with the replaced stack
    """
    record = ErrorRecord.from_error(error)

    if not record.stack:
        log.debug(LogEventNames.STACK_REPLACE_SKIPPED, error_name=record.name)
        return record

    _, frame_lines = split_stack(new_stack)
    relevant_lines = [line for line in frame_lines if spec_frame_marker not in line]

    return record.with_stack("\n".join([record.to_string(), *relevant_lines]))


def has_stack(error: ErrorRecord | Any) -> bool:
    """Check if an error has a stack with at least one frame line."""
    record = ErrorRecord.from_error(error)

    if not record.stack:
        return False

    _, frame_lines = split_stack(record.stack)
    return bool(frame_lines)


def is_from_cypress(error: ErrorRecord | Any, internal_origin: str = INTERNAL_ORIGIN) -> bool:
    """Check if an error was thrown from the test runner's own code.

    Args:
        error: ErrorRecord or host error
        internal_origin: URL scheme of the runner's internal files

    Returns:
        True if the first frame line references ``internal_origin``
    """
    _, frame_lines = split_stack(ErrorRecord.from_error(error).stack)

    if not frame_lines:
        return False

    return internal_origin in frame_lines[0]
