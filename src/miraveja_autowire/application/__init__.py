"""
Application layer - Use cases and orchestration.

This layer contains the extraction, resolution, caching and injection pipeline.
It depends only on the Domain layer.
"""

from .container import ServiceContainer
from .extractor import MetadataExtractor
from .injector import AutowireInjector
from .plan_cache import PlanBuilder, PlanCache
from .property_resolver import PropertyResolver
from .type_resolver import TypeReferenceResolver

__all__ = [
    "ServiceContainer",
    "MetadataExtractor",
    "TypeReferenceResolver",
    "PropertyResolver",
    "PlanBuilder",
    "PlanCache",
    "AutowireInjector",
]
