"""Abstract interfaces for external collaborators."""

from .resolver import SourceMapResolver

__all__ = ["SourceMapResolver"]
