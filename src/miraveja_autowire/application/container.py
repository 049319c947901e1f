from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from miraveja_autowire.domain import IServiceLookup, MissingServiceError, ServiceDefinition
from miraveja_autowire.domain.exceptions import describe_type

T = TypeVar("T")


class ServiceContainer(IServiceLookup):
    """Container of named services looked up by type.

    Each service is created once, on first access, by its builder and then
    shared. Lookup by type matches the registered type and its subclasses, so
    a service can be found through any base class or interface it derives from.

    Attributes:
        _definitions: Registered services keyed by name, in registration order.
        _instances: Services created so far, keyed by name.
    """

    def __init__(self) -> None:
        """Initialize the container with an empty registry."""
        self._definitions: Dict[str, ServiceDefinition] = {}
        self._instances: Dict[str, Any] = {}

    def register(
        self,
        service_type: Type,
        builder: Callable[["ServiceContainer"], Any],
        name: Optional[str] = None,
    ) -> str:
        """Register a single service.

        Args:
            service_type: The type the service is registered under.
            builder: Factory function receiving the container and returning the instance.
            name: Service name. Defaults to the qualified name of ``service_type``.

        Returns:
            The service name.

        Raises:
            ValueError: If a service with the same name is already registered.
        """
        name = name or describe_type(service_type)
        if name in self._definitions:
            raise ValueError(f"Service {name} is already registered")

        self._definitions[name] = ServiceDefinition(name=name, service_type=service_type, builder=builder)
        return name

    def register_services(self, services: Dict[Type, Callable[["ServiceContainer"], Any]]) -> None:
        """Register multiple services at once under their default names.

        Args:
            services: Dictionary mapping service types to builder functions.

        Example:
            >>> container.register_services({
            ...     Logger: lambda c: Logger(),
            ...     WidgetFactory: lambda c: WidgetFactory(c.get_by_type(Logger)),
            ... })
        """
        for service_type, builder in services.items():
            self.register(service_type, builder)

    def register_instance(self, service_type: Type, instance: Any, name: Optional[str] = None) -> str:
        """Register an already created service instance."""
        name = self.register(service_type, lambda c: instance, name)
        self._instances[name] = instance
        return name

    def find_service_type(self, service_type: Type) -> Optional[str]:
        names = self.find_all_by_type(service_type)
        return names[0] if names else None

    def find_all_by_type(self, service_type: Type) -> List[str]:
        """Return the names of every service assignable to a type, in registration order."""
        return [
            name
            for name, definition in self._definitions.items()
            if issubclass(definition.service_type, service_type)
        ]

    def get_service(self, handle: str) -> Any:
        if handle not in self._definitions:
            raise MissingServiceError(handle, f'Service "{handle}" is not registered.')

        if handle not in self._instances:
            self._instances[handle] = self._definitions[handle].builder(self)
        return self._instances[handle]

    def get_by_type(self, service_type: Type[T]) -> T:
        handle = self.find_service_type(service_type)
        if handle is None:
            raise MissingServiceError(service_type)
        return self.get_service(handle)

    def has_service(self, handle: str) -> bool:
        return handle in self._definitions

    def remove(self, handle: str) -> None:
        """Remove a service and its instance, if any."""
        self._definitions.pop(handle, None)
        self._instances.pop(handle, None)

    def clear(self) -> None:
        """Clear all registrations and created instances.

        Useful for testing or resetting the container state.
        """
        self._definitions.clear()
        self._instances.clear()
