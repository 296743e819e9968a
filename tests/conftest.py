"""Shared test fixtures for stack-mapper."""

import pytest

from stack_mapper.adapters.memory import InMemoryResolver
from stack_mapper.models.stack import SourcePosition
from tests.samples import BUNDLE_URL, SPEC_FILE, SPEC_SOURCE, VENDOR_URL


@pytest.fixture
def spec_source() -> str:
    """Return the original source of the spec file."""
    return SPEC_SOURCE


@pytest.fixture
def resolver() -> InMemoryResolver:
    """Return a resolver that maps bundle.js:10:3 to login.cy.js:5:22."""
    resolver = InMemoryResolver()
    resolver.add_mapping(
        BUNDLE_URL,
        SourcePosition(BUNDLE_URL, 10, 3),
        SourcePosition(SPEC_FILE, 5, 22),
    )
    resolver.add_mapping(
        BUNDLE_URL,
        SourcePosition(BUNDLE_URL, 20, 0),
        SourcePosition(SPEC_FILE, 3, 4),
    )
    resolver.add_source(BUNDLE_URL, SPEC_FILE, SPEC_SOURCE)
    return resolver


@pytest.fixture
def empty_resolver() -> InMemoryResolver:
    """Return a resolver that knows no source maps."""
    return InMemoryResolver()


@pytest.fixture
def chromium_stack() -> str:
    """Return a Chromium stack with a multi-line message."""
    return (
        "AssertionError: Timed out retrying\n"
        "Expected to find element: .submit\n"
        f"    at Context.eval ({BUNDLE_URL}:10:3)\n"
        f"    at callFn ({VENDOR_URL}:7:11)\n"
        "    at cypress://runner/cypress_runner.js:150:20"
    )


@pytest.fixture
def firefox_stack() -> str:
    """Return a Firefox stack, which omits the error name and message."""
    return (
        f"Context.prototype.eval/<@{BUNDLE_URL}:10:3\n"
        f"callFn@{VENDOR_URL}:7:11\n"
        "@cypress://runner/cypress_runner.js:150:20"
    )
