"""Core stack mapping components.

This module exports the main pipeline pieces:
- StackMapper: Facade that runs the whole pipeline
- stack_parser: Line classification, splitting and frame parsing
- source_mapper: Source position mapping and stack reconstruction
- code_frame: Code frame extraction and rendering
- stack_utils: Error-level normalization and inspection helpers
"""

from stack_mapper.core.code_frame import (
    get_code_frame,
    get_code_frame_from_source,
    get_language_from_extension,
    render_code_frame,
)
from stack_mapper.core.mapper import StackMapper
from stack_mapper.core.source_mapper import (
    FUNCTION_NAME_REWRITES,
    get_source_details_for_line,
    get_source_stack,
    map_to_source,
    reconstruct_stack,
)
from stack_mapper.core.stack_parser import (
    SplitState,
    StackDialect,
    StackSplitter,
    clean_function_name,
    detect_dialect,
    get_whitespace,
    is_frame_line,
    parse_frame_line,
    split_stack,
)
from stack_mapper.core.stack_utils import (
    error_to_string,
    has_stack,
    is_from_cypress,
    normalize_stack,
    replace_stack,
)

__all__ = [
    "FUNCTION_NAME_REWRITES",
    "SplitState",
    "StackDialect",
    "StackMapper",
    "StackSplitter",
    "clean_function_name",
    "detect_dialect",
    "error_to_string",
    "get_code_frame",
    "get_code_frame_from_source",
    "get_language_from_extension",
    "get_source_details_for_line",
    "get_source_stack",
    "get_whitespace",
    "has_stack",
    "is_frame_line",
    "is_from_cypress",
    "map_to_source",
    "normalize_stack",
    "parse_frame_line",
    "reconstruct_stack",
    "render_code_frame",
    "replace_stack",
    "split_stack",
]
