import logging
from typing import Callable, Type

from miraveja_autowire.application.extractor import MetadataExtractor
from miraveja_autowire.application.property_resolver import PropertyResolver
from miraveja_autowire.domain import ClassPlan, ICacheStore

logger = logging.getLogger(__name__)


def class_identity(cls: Type) -> str:
    """Return the cache identity of a runtime class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class PlanBuilder:
    """Builds the complete injection plan of a class.

    Runs the extractor, resolves every tag in scan order and attaches the
    invalidation keys. Any error aborts the whole plan.
    """

    def __init__(self, extractor: MetadataExtractor, resolver: PropertyResolver) -> None:
        self._extractor = extractor
        self._resolver = resolver

    def __call__(self, cls: Type) -> ClassPlan:
        properties = tuple(self._resolver.resolve(tag) for tag in self._extractor.extract(cls))
        logger.debug("Built injection plan for %s with %d properties", cls.__qualname__, len(properties))
        return ClassPlan(
            class_identity=class_identity(cls),
            properties=properties,
            invalidation_keys=frozenset(self._extractor.invalidation_keys(cls)),
        )


class PlanCache:
    """Memoizes class plans in a cache store.

    Invalidation is owned by the store: each plan is saved with its
    invalidation keys and recomputed when one of them changes.

    Attributes:
        _store: The cache store holding the plans.
        _namespace: Prefix of every cache key.
    """

    def __init__(self, store: ICacheStore, namespace: str) -> None:
        self._store = store
        self._namespace = namespace

    def get_or_build(self, cls: Type, builder: Callable[[Type], ClassPlan]) -> ClassPlan:
        """Return the cached plan of a class, building it on a miss.

        Args:
            cls: The runtime class of the object to autowire.
            builder: Called with ``cls`` when the plan is missing or stale.

        Returns:
            The class plan.
        """

        def compute():
            plan = builder(cls)
            return plan, plan.invalidation_keys

        return self._store.load_or_compute(f"{self._namespace}:{class_identity(cls)}", compute)
