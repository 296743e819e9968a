"""Data models and value records."""

from .error import CodeFrame, ErrorRecord
from .stack import (
    FrameFields,
    FrameLine,
    MessageLine,
    ParsedLine,
    SourcePosition,
    SourceStack,
)

__all__ = [
    # Stack models
    "FrameFields",
    "FrameLine",
    "MessageLine",
    "ParsedLine",
    "SourcePosition",
    "SourceStack",
    # Error models
    "CodeFrame",
    "ErrorRecord",
]
