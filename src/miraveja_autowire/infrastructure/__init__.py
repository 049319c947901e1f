"""
Infrastructure layer - External integrations.

This layer contains the default collaborators (metadata reader, cache stores),
pipeline wiring and integrations with external frameworks and tools.
It depends on both Application and Domain layers.
"""

from . import caching, metadata, testing
from .bootstrap import create_injector

__all__ = [
    "caching",
    "metadata",
    "testing",
    "create_injector",
]
