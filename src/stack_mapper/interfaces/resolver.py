"""Abstract interface for source map resolvers."""

from typing import Protocol

from ..models.stack import SourcePosition


class SourceMapResolver(Protocol):
    """Abstract interface for source map lookups.

    The resolver owns source map loading and caching. The stack mapper only
    asks it two questions and treats ``None`` as "not known".
    """

    def get_source_position(
        self,
        generated_file: str,
        position: SourcePosition,
    ) -> SourcePosition | None:
        """
        Find the original position for a position in a generated file.

        Args:
            generated_file: URL or path of the generated (bundled) file
            position: Generated position; 1-based line, 0-based column

        Returns:
            Original position (1-based line, 0-based column) or None if the
            generated file has no source map or the position is unmapped
        """
        ...

    def get_source_contents(
        self,
        file_url: str,
        relative_file: str | None,
    ) -> str | None:
        """
        Fetch the original source text for a file referenced by a source map.

        Args:
            file_url: URL or path of the generated file
            relative_file: Original source path as recorded in the source map

        Returns:
            Full source text, or None if it is not available
        """
        ...
