"""Dictionary-backed source map resolver.

Useful when a host has already decoded its source maps into plain
line/column tables, and as a deterministic resolver in tests.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from stack_mapper.models.stack import SourcePosition
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()


class InMemoryResolver:
    """Resolve positions from explicit per-file mapping tables.

    Positions are keyed by ``(line, column)`` of the generated file. A lookup
    first tries the exact column and then falls back to the closest mapped
    column at or before it on the same line, which is how segment-based
    source maps resolve columns inside a mapped token.

    Example:
        resolver = InMemoryResolver()
        resolver.add_mapping(
            "http://localhost/bundle.js",
            SourcePosition("http://localhost/bundle.js", 10, 3),
            SourcePosition("cypress/e2e/spec.js", 5, 1),
        )
        resolver.add_source("http://localhost/bundle.js", "cypress/e2e/spec.js", text)
    """

    def __init__(
        self,
        mappings: Mapping[str, Mapping[tuple[int, int], SourcePosition]] | None = None,
        sources: Mapping[tuple[str, str], str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            mappings: Generated file -> {(line, column): original position}
            sources: (generated file, original file) -> source text
        """
        self._mappings: dict[str, dict[tuple[int, int], SourcePosition]] = {
            file: dict(table) for file, table in (mappings or {}).items()
        }
        self._sources: dict[tuple[str, str], str] = dict(sources or {})

    def add_mapping(
        self,
        generated_file: str,
        generated: SourcePosition,
        original: SourcePosition,
    ) -> None:
        """Register one generated -> original position pair."""
        table = self._mappings.setdefault(generated_file, {})
        table[(generated.line, generated.column)] = original

    def add_source(self, file_url: str, relative_file: str, contents: str) -> None:
        """Register the original source text for a file."""
        self._sources[(file_url, relative_file)] = contents

    def get_source_position(
        self,
        generated_file: str,
        position: SourcePosition,
    ) -> SourcePosition | None:
        """Find the original position for a generated position."""
        table = self._mappings.get(generated_file)
        if not table:
            return None

        exact = table.get((position.line, position.column))
        if exact is not None:
            return exact

        candidates = [
            column
            for line, column in table
            if line == position.line and column <= position.column
        ]
        if not candidates:
            log.debug(
                LogEventNames.SOURCE_POSITION_UNMAPPED,
                generated_file=generated_file,
                line=position.line,
                column=position.column,
            )
            return None

        return table[(position.line, max(candidates))]

    def get_source_contents(
        self,
        file_url: str,
        relative_file: str | None,
    ) -> str | None:
        """Fetch the original source text registered for a file."""
        if relative_file is None:
            return None
        return self._sources.get((file_url, relative_file))
