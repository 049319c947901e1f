from typing import Optional

from miraveja_autowire.application import (
    AutowireInjector,
    MetadataExtractor,
    PlanBuilder,
    PlanCache,
    PropertyResolver,
)
from miraveja_autowire.domain import AutowireSettings, ICacheStore, IMetadataReader, IServiceLookup
from miraveja_autowire.infrastructure.caching import MemoryCacheStore
from miraveja_autowire.infrastructure.metadata import ClassMetadataReader


def create_injector(
    container: IServiceLookup,
    settings: Optional[AutowireSettings] = None,
    *,
    cache_store: Optional[ICacheStore] = None,
    reader: Optional[IMetadataReader] = None,
) -> AutowireInjector:
    """Wire the extraction, resolution, caching and injection pipeline.

    Args:
        container: Container providing the services.
        settings: Autowiring settings. Defaults to strict mode with ``Component`` as base type.
        cache_store: Store for class plans. Defaults to the ``ICacheStore``
            service registered in the container, or a new in-memory store.
        reader: Metadata reader. Defaults to ``ClassMetadataReader``.

    Returns:
        A ready to use injector.

    Example:
        >>> container = ServiceContainer()
        >>> container.register_services({Logger: lambda c: Logger()})
        >>> injector = create_injector(container, AutowireSettings(strict=False))
    """
    settings = settings or AutowireSettings()
    reader = reader or ClassMetadataReader()

    if cache_store is None:
        handle = container.find_service_type(ICacheStore)
        cache_store = container.get_service(handle) if handle is not None else MemoryCacheStore()

    builder = PlanBuilder(
        MetadataExtractor(reader, settings, container),
        PropertyResolver(container, reader),
    )
    return AutowireInjector(container, PlanCache(cache_store, settings.cache_namespace), builder, settings)
