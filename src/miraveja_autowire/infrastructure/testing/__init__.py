"""
Testing utilities module.

Provides helpers for testing applications that use miraveja-autowire.
"""

from .utilities import TestServiceContainer, create_mock_container

__all__ = [
    "TestServiceContainer",
    "create_mock_container",
]
