import logging
from typing import Any

from miraveja_autowire.application.plan_cache import PlanBuilder, PlanCache
from miraveja_autowire.domain import AccessError, AutowireSettings, IInjector, InjectionPlan, IServiceLookup
from miraveja_autowire.domain.exceptions import describe_member, describe_type

logger = logging.getLogger(__name__)


class _PropertyWriter:
    """Writes autowired values straight into instances.

    The value goes into the instance ``__dict__`` under the stored attribute
    name (mangled for private properties), skipping any ``__setattr__``
    override of the target class. Objects without an instance ``__dict__``
    cannot hold autowired values.
    """

    @staticmethod
    def write(target: object, plan: InjectionPlan, value: Any) -> None:
        try:
            namespace = vars(target)
        except TypeError:
            raise AccessError(
                f"Cannot autowire {describe_member(plan.declaring_class, plan.property_name)}, "
                f"instances of {describe_type(type(target))} have no __dict__.",
                declaring_class=plan.declaring_class,
                member=plan.property_name,
            ) from None
        namespace[plan.property_name] = value


class AutowireInjector(IInjector):
    """Injects services into the autowired properties of objects.

    Plans are taken from the plan cache and executed in order. A failure
    aborts the call; properties written before it keep their values.

    Attributes:
        _lookup: Container providing the services.
        _plan_cache: Cache of class plans.
        _builder: Pipeline building a class plan on a cache miss.
        _settings: Strict mode and component type.

    Example:
        >>> container = ServiceContainer()
        >>> container.register_services({Logger: lambda c: Logger()})
        >>> injector = create_injector(container)
        >>>
        >>> class HomePage(Component):
        ...     logger: Logger = autowire()
        >>>
        >>> page = HomePage()
        >>> injector.inject(page)
        >>> page.logger is container.get_by_type(Logger)
        True
    """

    def __init__(
        self,
        lookup: IServiceLookup,
        plan_cache: PlanCache,
        builder: PlanBuilder,
        settings: AutowireSettings,
    ) -> None:
        self._lookup = lookup
        self._plan_cache = plan_cache
        self._builder = builder
        self._settings = settings
        self._writer = _PropertyWriter()

    @property
    def settings(self) -> AutowireSettings:
        return self._settings

    def inject(self, obj: object) -> None:
        """Inject every autowired property of an object.

        Args:
            obj: The object to autowire.

        Raises:
            AccessError: In strict mode, if the object is not a component.
            AutowireError: Any error raised while building the class plan.
        """
        component_type = self._settings.component_type
        if self._settings.strict and not isinstance(obj, component_type):
            raise AccessError(
                f"Property autowiring can be used only in descendants of {describe_type(component_type)}, "
                f"got {describe_type(type(obj))}."
            )

        plan = self._plan_cache.get_or_build(type(obj), self._builder)
        for property_plan in plan.properties:
            self._writer.write(obj, property_plan, self._create_instance(property_plan))
            logger.debug(
                "Injected %s into %s",
                describe_type(property_plan.target_type),
                describe_member(property_plan.declaring_class, property_plan.property_name),
            )

    def _create_instance(self, plan: InjectionPlan) -> Any:
        if plan.factory is not None:
            factory = self._lookup.get_service(plan.factory.service_ref)
            return getattr(factory, plan.factory.method_name)(*plan.factory.arguments)
        return self._lookup.get_by_type(plan.target_type)
