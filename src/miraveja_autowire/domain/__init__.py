"""
Domain layer - Core models and contracts.

This layer contains the models, errors and collaborator interfaces of property autowiring.
It has no dependencies on other layers.
"""

from .component import Component
from .enums import ResolutionStatus, Visibility
from .exceptions import (
    AccessError,
    AutowireError,
    MissingServiceError,
    MissingTypeError,
    TagValidationError,
    TypeMismatchError,
)
from .interfaces import ICacheStore, IInjector, IMetadataReader, IServiceLookup
from .models import (
    AutowireSettings,
    ClassPlan,
    FactoryBinding,
    InjectionPlan,
    PropertyTag,
    ServiceDefinition,
    TypeResolution,
)

# Rebuild Pydantic models to resolve forward references
ServiceDefinition.model_rebuild()

__all__ = [
    # Base types
    "Component",
    # Enums
    "ResolutionStatus",
    "Visibility",
    # Exceptions
    "AutowireError",
    "AccessError",
    "TagValidationError",
    "MissingTypeError",
    "MissingServiceError",
    "TypeMismatchError",
    # Interfaces
    "IServiceLookup",
    "ICacheStore",
    "IMetadataReader",
    "IInjector",
    # Models
    "AutowireSettings",
    "ServiceDefinition",
    "PropertyTag",
    "FactoryBinding",
    "InjectionPlan",
    "ClassPlan",
    "TypeResolution",
]
