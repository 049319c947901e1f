"""Unit tests for AutowireInjector."""

from unittest.mock import Mock

import pytest

from miraveja_autowire.application.container import ServiceContainer
from miraveja_autowire.application.injector import AutowireInjector
from miraveja_autowire.domain import (
    AccessError,
    AutowireSettings,
    Component,
    IInjector,
    MissingServiceError,
    TypeMismatchError,
)
from miraveja_autowire.infrastructure.bootstrap import create_injector
from miraveja_autowire.infrastructure.caching import MemoryCacheStore
from miraveja_autowire.infrastructure.metadata import autowire


class Logger:
    pass


class Widget:
    def __init__(self, *args):
        self.args = args


class Gadget:
    pass


class WidgetFactory:
    def build(self, *args) -> Widget:
        return Widget(*args)

    def gadget(self) -> Gadget:
        return Gadget()


class PlainPage(Component):
    title: str = "plain"


class LoggerPage(Component):
    logger: Logger = autowire()


class WidgetPage(Component):
    widget: Widget = autowire("small", factory="WidgetFactory::build", color="red")


class MismatchPage(Component):
    widget: Widget = autowire(factory="WidgetFactory::gadget")


class ChildPage(LoggerPage):
    _widget: Widget = autowire(factory="WidgetFactory::build")


class PrivatePage(Component):
    __logger: Logger = autowire()

    def private_logger(self):
        return self.__logger


class FrozenPage(Component):
    logger: Logger = autowire()

    def __setattr__(self, name, value):
        raise AttributeError(f"{name} is read-only")


class FailingFactoryPage(Component):
    logger: Logger = autowire()
    widget: Widget = autowire(factory="WidgetFactory::build")


class NotAComponent:
    logger: Logger = autowire()


class SlottedPage:
    __slots__ = ()
    logger: Logger = autowire()


@pytest.fixture
def container() -> ServiceContainer:
    container = ServiceContainer()
    container.register(Logger, Mock(side_effect=lambda c: Logger()), name="logger")
    container.register(WidgetFactory, lambda c: WidgetFactory(), name="widgets")
    return container


@pytest.fixture
def injector(container) -> AutowireInjector:
    return create_injector(container, cache_store=MemoryCacheStore())


class TestInjectorInitialization:
    """Test cases for injector construction."""

    def test_injector_implements_interface(self, injector):
        """Test that AutowireInjector implements IInjector."""
        assert isinstance(injector, IInjector)

    def test_default_settings_are_strict(self, injector):
        """Test that the default settings enable strict mode."""
        assert injector.settings.strict is True
        assert injector.settings.component_type is Component


class TestDirectInjection:
    """Test cases for injecting services looked up by type."""

    def test_inject_without_tags_is_noop(self, injector):
        """Test that objects without autowired properties are left untouched."""
        page = PlainPage()

        injector.inject(page)

        assert vars(page) == {}

    def test_inject_service(self, container, injector):
        """Test that the container's service is written to the property."""
        page = LoggerPage()

        injector.inject(page)

        assert page.logger is container.get_by_type(Logger)

    def test_service_read_once_per_injection(self, container, injector):
        """Test that each injection looks the service up exactly once."""
        spy = Mock(wraps=container.get_by_type)
        container.get_by_type = spy

        injector.inject(LoggerPage())

        spy.assert_called_once_with(Logger)

    def test_property_unreadable_before_injection(self):
        """Test that the marker is not visible through instances."""
        with pytest.raises(AttributeError, match="not autowired yet"):
            LoggerPage().logger

    def test_inherited_and_own_properties(self, container, injector):
        """Test injection of properties declared across the class hierarchy."""
        page = ChildPage()

        injector.inject(page)

        assert isinstance(page._widget, Widget)
        assert page.logger is container.get_by_type(Logger)

    def test_bypasses_setattr(self, container, injector):
        """Test that values are written even when __setattr__ refuses them."""
        page = FrozenPage()

        injector.inject(page)

        assert page.logger is container.get_by_type(Logger)


class TestFactoryInjection:
    """Test cases for injecting values created by factories."""

    def test_factory_called_with_arguments(self, injector):
        """Test that the factory method receives the tag arguments in order."""
        page = WidgetPage()

        injector.inject(page)

        assert isinstance(page.widget, Widget)
        assert page.widget.args == ("small", "red")

    def test_factory_called_on_each_injection(self, injector):
        """Test that every injection asks the factory for a new value."""
        first, second = WidgetPage(), WidgetPage()

        injector.inject(first)
        injector.inject(second)

        assert first.widget is not second.widget

    def test_type_mismatch_raises_before_instantiation(self, container):
        """Test that mismatching factories fail before any service is created."""
        builder = Mock(return_value=WidgetFactory())
        container.remove("widgets")
        container.register(WidgetFactory, builder, name="widgets")
        injector = create_injector(container, cache_store=MemoryCacheStore())

        with pytest.raises(TypeMismatchError):
            injector.inject(MismatchPage())

        builder.assert_not_called()


class TestStrictMode:
    """Test cases for strict mode checks."""

    def test_non_component_raises_in_strict_mode(self, injector):
        """Test that only components can be autowired in strict mode."""
        with pytest.raises(AccessError, match="descendants of"):
            injector.inject(NotAComponent())

    def test_non_component_allowed_when_not_strict(self, container):
        """Test that any object can be autowired in non-strict mode."""
        injector = create_injector(container, AutowireSettings(strict=False), cache_store=MemoryCacheStore())
        obj = NotAComponent()

        injector.inject(obj)

        assert obj.logger is container.get_by_type(Logger)

    def test_private_property_raises_in_strict_mode(self, injector):
        """Test that private autowired properties are rejected in strict mode."""
        with pytest.raises(AccessError, match="must be protected or public"):
            injector.inject(PrivatePage())

    def test_private_property_injected_when_not_strict(self, container):
        """Test that private properties are injected under their mangled name."""
        injector = create_injector(container, AutowireSettings(strict=False), cache_store=MemoryCacheStore())
        page = PrivatePage()

        injector.inject(page)

        assert page.private_logger() is container.get_by_type(Logger)


class TestFailures:
    """Test cases for failures during injection."""

    def test_missing_service_raises(self):
        """Test that plans for unregistered services fail."""
        injector = create_injector(ServiceContainer(), cache_store=MemoryCacheStore())

        with pytest.raises(MissingServiceError):
            injector.inject(LoggerPage())

    def test_already_written_properties_are_kept(self, container, injector):
        """Test that an error does not roll back earlier properties."""
        container.get_service("widgets").build = Mock(side_effect=RuntimeError("factory failed"))
        page = FailingFactoryPage()

        with pytest.raises(RuntimeError, match="factory failed"):
            injector.inject(page)

        assert page.logger is container.get_by_type(Logger)
        assert "widget" not in vars(page)

    def test_object_without_dict_raises(self, container):
        """Test that objects without an instance dictionary cannot be autowired."""
        injector = create_injector(container, AutowireSettings(strict=False), cache_store=MemoryCacheStore())

        with pytest.raises(AccessError, match="SlottedPage.logger") as exc_info:
            injector.inject(SlottedPage())

        assert exc_info.value.declaring_class is SlottedPage
        assert exc_info.value.member == "logger"
