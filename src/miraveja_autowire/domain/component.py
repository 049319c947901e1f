from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from miraveja_autowire.domain.interfaces import IInjector


class Component:
    """Base type for objects the host framework creates outside the container.

    Subclasses declare autowired properties with ``autowire()`` markers and
    call :meth:`autowire_properties` once they are attached to the framework.
    Attributes declared on this class (and above it) are never scanned.

    Example:
        >>> class HomePage(Component):
        ...     logger: Logger = autowire()
        >>>
        >>> page = HomePage()
        >>> page.autowire_properties(injector)
    """

    def autowire_properties(self, injector: "IInjector") -> None:
        """Inject every autowired property of this component.

        Args:
            injector: The injector holding the container and plan cache.
        """
        injector.inject(self)
