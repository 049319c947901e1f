"""Integration tests for plan cache invalidation on source changes."""

import importlib
import sys
import textwrap
from unittest.mock import patch

import pytest

from miraveja_autowire import FileCacheStore, MemoryCacheStore, ServiceContainer, create_injector
from miraveja_autowire.application.extractor import MetadataExtractor

PAGES_SOURCE = textwrap.dedent(
    """
    from miraveja_autowire import Component, autowire


    class Clock:
        pass


    class ClockPage(Component):
        clock: Clock = autowire()
    """
)


@pytest.fixture
def pages_module(tmp_path, monkeypatch):
    """Import a throwaway module whose source file the tests can change."""
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    path = source_dir / "autowire_invalidation_pages.py"
    path.write_text(PAGES_SOURCE)
    monkeypatch.syspath_prepend(str(source_dir))

    module = importlib.import_module("autowire_invalidation_pages")
    yield module
    sys.modules.pop("autowire_invalidation_pages", None)


@pytest.fixture
def container(pages_module) -> ServiceContainer:
    container = ServiceContainer()
    container.register_services({pages_module.Clock: lambda c: pages_module.Clock()})
    return container


def touch_source(module) -> None:
    with open(module.__file__, "a") as handle:
        handle.write("\n# changed\n")


def spy_extract():
    return patch.object(MetadataExtractor, "extract", autospec=True, side_effect=MetadataExtractor.extract)


class TestMemoryStoreInvalidation:
    """Integration tests for invalidation with the in-memory store."""

    def test_unchanged_source_reuses_plan(self, pages_module, container):
        """Test that the plan is reused while the source is unchanged."""
        injector = create_injector(container, cache_store=MemoryCacheStore())
        injector.inject(pages_module.ClockPage())

        with spy_extract() as extract:
            injector.inject(pages_module.ClockPage())

        assert extract.call_count == 0

    def test_changed_source_rebuilds_plan(self, pages_module, container):
        """Test that changing the declaring module forces a rebuild."""
        injector = create_injector(container, cache_store=MemoryCacheStore())
        injector.inject(pages_module.ClockPage())

        touch_source(pages_module)
        with spy_extract() as extract:
            page = pages_module.ClockPage()
            injector.inject(page)

        assert extract.call_count == 1
        assert page.clock is container.get_by_type(pages_module.Clock)

    def test_source_file_is_an_invalidation_key(self, pages_module, container):
        """Test that the plan lists the declaring module and the container module."""
        store = MemoryCacheStore()
        injector = create_injector(container, cache_store=store)

        injector.inject(pages_module.ClockPage())

        plan = next(iter(store._entries.values())).value
        assert pages_module.__file__ in plan.invalidation_keys
        assert sys.modules[ServiceContainer.__module__].__file__ in plan.invalidation_keys


class TestFileStoreInvalidation:
    """Integration tests for invalidation with the file store."""

    def test_plans_survive_new_store_instances(self, tmp_path, pages_module, container):
        """Test that a new store over the same directory reuses stored plans."""
        cache_dir = tmp_path / "cache"
        create_injector(container, cache_store=FileCacheStore(cache_dir)).inject(pages_module.ClockPage())

        with spy_extract() as extract:
            page = pages_module.ClockPage()
            create_injector(container, cache_store=FileCacheStore(cache_dir)).inject(page)

        assert extract.call_count == 0
        assert page.clock is container.get_by_type(pages_module.Clock)

    def test_changed_source_rebuilds_stored_plan(self, tmp_path, pages_module, container):
        """Test that a stored plan is rebuilt after its source changes."""
        cache_dir = tmp_path / "cache"
        create_injector(container, cache_store=FileCacheStore(cache_dir)).inject(pages_module.ClockPage())

        touch_source(pages_module)
        with spy_extract() as extract:
            create_injector(container, cache_store=FileCacheStore(cache_dir)).inject(pages_module.ClockPage())

        assert extract.call_count == 1

    def test_corrupted_entry_is_rebuilt(self, tmp_path, pages_module, container):
        """Test that an unreadable entry counts as a miss."""
        cache_dir = tmp_path / "cache"
        store = FileCacheStore(cache_dir)
        create_injector(container, cache_store=store).inject(pages_module.ClockPage())
        for path in cache_dir.glob(f"*{FileCacheStore.SUFFIX}"):
            path.write_bytes(b"")

        with spy_extract() as extract:
            page = pages_module.ClockPage()
            create_injector(container, cache_store=FileCacheStore(cache_dir)).inject(page)

        assert extract.call_count == 1
        assert page.clock is container.get_by_type(pages_module.Clock)
