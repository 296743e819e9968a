"""Concrete implementations of the resolver interface.

Available resolvers:
- memory: Dictionary-backed resolver
"""

from .memory import InMemoryResolver

__all__ = ["InMemoryResolver"]
