"""Tests for the dictionary-backed resolver."""

import pytest

from stack_mapper.adapters.memory import InMemoryResolver
from stack_mapper.models.stack import SourcePosition


@pytest.fixture
def resolver() -> InMemoryResolver:
    """Create a resolver with two mapped columns on one line."""
    return InMemoryResolver(
        mappings={
            "bundle.js": {
                (10, 0): SourcePosition("spec.js", 5, 0),
                (10, 8): SourcePosition("spec.js", 5, 12),
            }
        },
        sources={("bundle.js", "spec.js"): "it('works')"},
    )


class TestGetSourcePosition:
    """Tests for InMemoryResolver.get_source_position."""

    def test_exact_match(self, resolver: InMemoryResolver) -> None:
        """Test a position that is mapped exactly."""
        result = resolver.get_source_position("bundle.js", SourcePosition("bundle.js", 10, 8))
        assert result == SourcePosition("spec.js", 5, 12)

    def test_closest_preceding_column(self, resolver: InMemoryResolver) -> None:
        """Test a column inside a mapped segment."""
        result = resolver.get_source_position("bundle.js", SourcePosition("bundle.js", 10, 6))
        assert result == SourcePosition("spec.js", 5, 0)

    def test_unmapped_line(self, resolver: InMemoryResolver) -> None:
        """Test a line without mappings."""
        result = resolver.get_source_position("bundle.js", SourcePosition("bundle.js", 11, 0))
        assert result is None

    def test_unknown_file(self, resolver: InMemoryResolver) -> None:
        """Test a file without a source map."""
        assert resolver.get_source_position("other.js", SourcePosition("other.js", 10, 0)) is None

    def test_add_mapping(self, resolver: InMemoryResolver) -> None:
        """Test registering a mapping after construction."""
        resolver.add_mapping(
            "other.js",
            SourcePosition("other.js", 1, 1),
            SourcePosition("other.ts", 2, 2),
        )
        result = resolver.get_source_position("other.js", SourcePosition("other.js", 1, 1))
        assert result == SourcePosition("other.ts", 2, 2)


class TestGetSourceContents:
    """Tests for InMemoryResolver.get_source_contents."""

    def test_known_source(self, resolver: InMemoryResolver) -> None:
        """Test fetching registered source text."""
        assert resolver.get_source_contents("bundle.js", "spec.js") == "it('works')"

    def test_unknown_source(self, resolver: InMemoryResolver) -> None:
        """Test that unknown sources return None."""
        assert resolver.get_source_contents("bundle.js", "other.js") is None
        assert resolver.get_source_contents("bundle.js", None) is None

    def test_add_source(self, resolver: InMemoryResolver) -> None:
        """Test registering source text after construction."""
        resolver.add_source("bundle.js", "other.js", "x")
        assert resolver.get_source_contents("bundle.js", "other.js") == "x"
