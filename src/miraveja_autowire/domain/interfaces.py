from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type


class IServiceLookup(ABC):
    """Abstract interface for the container operations used by autowiring."""

    @abstractmethod
    def find_service_type(self, service_type: Type) -> Optional[str]:
        """Find the handle of a service registered for a type.

        Args:
            service_type: The class or interface to look for.

        Returns:
            The service handle, or None if nothing is registered.
        """

    @abstractmethod
    def get_service(self, handle: str) -> Any:
        """Return the service instance registered under a handle.

        Args:
            handle: Service handle returned by ``find_service_type``.
        """

    @abstractmethod
    def get_by_type(self, service_type: Type) -> Any:
        """Return the service instance registered for a type.

        Args:
            service_type: The class or interface to look for.
        """


class ICacheStore(ABC):
    """Abstract interface for a cache that tracks invalidation dependencies."""

    @abstractmethod
    def load_or_compute(self, key: str, compute: Callable[[], Tuple[Any, Iterable[str]]]) -> Any:
        """Load a cached value or compute and store it.

        Args:
            key: Cache key.
            compute: Called on a miss; returns the value and its dependencies
                (file paths whose change invalidates the value).

        Returns:
            The cached or freshly computed value.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached value."""


class IMetadataReader(ABC):
    """Abstract interface for reading declarative tags of classes."""

    @abstractmethod
    def properties(self, owner: Type) -> List[str]:
        """List the properties declared directly on a class, in declaration order."""

    @abstractmethod
    def declared_tags(self, owner: Type, member: str) -> Dict[str, Dict[Any, Any]]:
        """Return the tags of a property or method declared on a class.

        Args:
            owner: Class declaring the member.
            member: Property or method name.

        Returns:
            Mapping of tag name to its raw value (positional values under
            integer keys, keyword values under their names).
        """


class IInjector(ABC):
    """Abstract interface for property injection."""

    @abstractmethod
    def inject(self, obj: object) -> None:
        """Inject every autowired property of an object.

        Args:
            obj: The object to autowire.
        """
