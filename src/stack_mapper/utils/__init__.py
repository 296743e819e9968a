"""Utility functions and helpers.

- errors: Exception hierarchy
- logging: Structured logging configuration
"""

from stack_mapper.utils.errors import CodeFrameError, ConfigError, StackMapperError
from stack_mapper.utils.logging import (
    LogConfig,
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

__all__ = [
    # Errors
    "CodeFrameError",
    "ConfigError",
    "StackMapperError",
    # Logging
    "LogConfig",
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
