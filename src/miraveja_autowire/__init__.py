"""
miraveja-autowire: Declarative property autowiring for framework-managed objects.

Public API exports for the miraveja-autowire package.
"""

# Application exports
from miraveja_autowire.application.container import ServiceContainer
from miraveja_autowire.application.injector import AutowireInjector

# Domain exports
from miraveja_autowire.domain.component import Component
from miraveja_autowire.domain.exceptions import (
    AccessError,
    AutowireError,
    MissingServiceError,
    MissingTypeError,
    TagValidationError,
    TypeMismatchError,
)
from miraveja_autowire.domain.models import AutowireSettings

# Infrastructure exports
from miraveja_autowire.infrastructure.bootstrap import create_injector
from miraveja_autowire.infrastructure.caching import FileCacheStore, MemoryCacheStore
from miraveja_autowire.infrastructure.metadata import autowire, tag

__version__ = "0.1.0"

__all__ = [
    # Container and injector
    "ServiceContainer",
    "AutowireInjector",
    "create_injector",
    # Declarations
    "Component",
    "autowire",
    "tag",
    # Configuration
    "AutowireSettings",
    # Cache stores
    "MemoryCacheStore",
    "FileCacheStore",
    # Exceptions
    "AutowireError",
    "AccessError",
    "TagValidationError",
    "MissingTypeError",
    "MissingServiceError",
    "TypeMismatchError",
]
