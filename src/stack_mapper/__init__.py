"""Source-mapped stack traces for test runner errors."""

from stack_mapper.core import (
    StackMapper,
    get_code_frame,
    get_source_stack,
    has_stack,
    is_from_cypress,
    normalize_stack,
    reconstruct_stack,
    replace_stack,
    split_stack,
)
from stack_mapper.models import CodeFrame, ErrorRecord, FrameLine, MessageLine, SourcePosition

__all__ = [
    "CodeFrame",
    "ErrorRecord",
    "FrameLine",
    "MessageLine",
    "SourcePosition",
    "StackMapper",
    "get_code_frame",
    "get_source_stack",
    "has_stack",
    "is_from_cypress",
    "normalize_stack",
    "reconstruct_stack",
    "replace_stack",
    "split_stack",
]
