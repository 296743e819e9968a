"""Facade that runs the full stack mapping pipeline.

This module implements the StackMapper class, which binds a source map
resolver and configuration to the stack functions:

    error -> normalize_stack -> get_source_stack -> get_code_frame
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from stack_mapper.config.loader import load_config
from stack_mapper.config.schema import StackMapperConfig
from stack_mapper.core.code_frame import get_code_frame
from stack_mapper.core.source_mapper import get_source_stack
from stack_mapper.core.stack_utils import (
    has_stack,
    is_from_cypress,
    normalize_stack,
    replace_stack,
)
from stack_mapper.interfaces.resolver import SourceMapResolver
from stack_mapper.models.error import CodeFrame, ErrorRecord
from stack_mapper.models.stack import SourceStack
from stack_mapper.utils.logging import LogEventNames, configure_logging

log = structlog.get_logger()


class StackMapper:
    """Maps error stacks from generated code back to original sources.

    Responsibilities:
    - Normalize stacks so they start with the error's name and message
    - Rewrite every frame to its original source location
    - Attach a code frame for the first frame with a file

    Example:
        mapper = StackMapper.from_config_file(resolver, Path("stack-mapper.yaml"))
        record = mapper.process(error)
        print(record.stack)
        if record.code_frame:
            print(record.code_frame.frame)
    """

    def __init__(
        self,
        resolver: SourceMapResolver,
        config: StackMapperConfig | None = None,
    ) -> None:
        """Initialize the StackMapper.

        Args:
            resolver: Source map resolver for positions and source contents
            config: Mapper configuration (defaults when omitted)
        """
        self._resolver = resolver
        self._config = config or StackMapperConfig()

    @classmethod
    def from_config_file(cls, resolver: SourceMapResolver, path: Path) -> StackMapper:
        """Create a StackMapper from a YAML file and apply its logging settings.

        Args:
            resolver: Source map resolver for positions and source contents
            path: Path to the YAML configuration file

        Returns:
            StackMapper bound to the loaded configuration
        """
        config = load_config(path)
        configure_logging(level=config.logging.level, log_format=config.logging.format)
        return cls(resolver, config)

    @property
    def config(self) -> StackMapperConfig:
        """The active configuration."""
        return self._config

    def source_stack(self, error: ErrorRecord | Any) -> SourceStack | None:
        """Parse and source-map the stack of an error.

        Returns:
            SourceStack, or None if the error has no string stack
        """
        record = ErrorRecord.from_error(error)
        return get_source_stack(
            record.stack,
            self._resolver,
            project_root=self._config.project_root,
            rewrites=self._config.stack.function_name_rewrites,
        )

    def code_frame(self, error: ErrorRecord | Any) -> CodeFrame | Mapping[str, Any] | None:
        """Get the code frame for an error's first frame with a file."""
        return get_code_frame(
            error,
            self._resolver,
            lines_above=self._config.code_frame.lines_above,
            lines_below=self._config.code_frame.lines_below,
        )

    def normalize(self, error: Any) -> Any:
        """Normalize a host error's stack in place and return the same error."""
        return normalize_stack(error).apply_to(error)

    def replace(self, error: Any, new_stack: str) -> Any:
        """Replace a host error's frames in place and return the same error."""
        record = replace_stack(
            error,
            new_stack,
            spec_frame_marker=self._config.stack.spec_frame_marker,
        )
        return record.apply_to(error)

    def has_stack(self, error: ErrorRecord | Any) -> bool:
        """Check if an error has at least one frame line."""
        return has_stack(error)

    def is_internal(self, error: ErrorRecord | Any) -> bool:
        """Check if an error was thrown from the runner's internal files."""
        return is_from_cypress(error, internal_origin=self._config.stack.internal_origin)

    def process(self, error: ErrorRecord | Any) -> ErrorRecord:
        """Run the full pipeline on an error.

        Args:
            error: ErrorRecord or host error

        Returns:
            ErrorRecord with the normalized, source-mapped ``stack``, its
            ``parsed_stack`` and a ``code_frame`` when one is available
        """
        record = normalize_stack(error)
        source_stack = self.source_stack(record)

        if source_stack is None:
            return record

        record = dataclasses.replace(
            record,
            stack=source_stack.source_mapped,
            parsed_stack=source_stack.parsed,
        )
        record = dataclasses.replace(record, code_frame=self.code_frame(record))

        log.debug(
            LogEventNames.SOURCE_STACK_BUILT,
            error_name=record.name,
            frames=len(source_stack.frames),
            has_code_frame=record.code_frame is not None,
        )
        return record
