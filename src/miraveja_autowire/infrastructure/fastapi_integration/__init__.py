"""
FastAPI integration module.

Provides helpers for autowiring request components in FastAPI applications.
"""

from .integration import (
    AutowireMiddleware,
    create_autowired_dependency,
    create_request_autowired_dependency,
)

__all__ = [
    "create_autowired_dependency",
    "create_request_autowired_dependency",
    "AutowireMiddleware",
]
