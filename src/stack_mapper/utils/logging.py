"""Structured logging configuration.

This module provides logging configuration for the stack mapper:
- Configurable log levels and output formats (JSON/console)
- Context injection for correlation

The mapping pipeline only logs at debug level; hosts call
``configure_logging`` once at startup to choose where that output goes.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast

import structlog
from structlog.typing import WrappedLogger


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.CONSOLE


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add the service name and version to all log entries.

    Args:
        logger: Logger instance (unused)
        method_name: Log method name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with added context
    """
    event_dict["service"] = "stack-mapper"

    try:
        from stack_mapper._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    log_format: LogFormat | str = LogFormat.CONSOLE,
) -> None:
    """Configure structured logging for the stack mapper.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)

    Example:
        # Trace every unresolved frame while debugging source maps
        configure_logging(level="DEBUG", log_format="console")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=[console_handler],
        force=True,
    )


def get_logger(name: str | None = None) -> WrappedLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Configured structlog logger
    """
    return cast(WrappedLogger, structlog.get_logger(name))


def bind_context(**kwargs: Any) -> None:
    """Bind contextual variables for all subsequent log calls.

    Args:
        **kwargs: Key-value pairs to bind

    Example:
        bind_context(spec="login.cy.ts")
        log.debug("source_stack_built")  # Includes spec
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove contextual variables."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound contextual variables."""
    structlog.contextvars.clear_contextvars()


class LogEventNames:
    """Standard log event names for consistency."""

    # Stack parsing
    FRAME_UNPARSEABLE = "frame_unparseable"

    # Source mapping
    SOURCE_POSITION_UNRESOLVED = "source_position_unresolved"
    SOURCE_POSITION_UNMAPPED = "source_position_unmapped"
    SOURCE_STACK_BUILT = "source_stack_built"
    SOURCE_STACK_SKIPPED = "source_stack_skipped"

    # Code frames
    CODE_FRAME_UNAVAILABLE = "code_frame_unavailable"

    # Error normalization
    STACK_NORMALIZED = "stack_normalized"
    STACK_REPLACE_SKIPPED = "stack_replace_skipped"
    STACK_WRITEBACK_SKIPPED = "stack_writeback_skipped"

    # Configuration
    CONFIG_LOADED = "config_loaded"
