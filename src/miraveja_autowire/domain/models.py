from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from miraveja_autowire.domain.component import Component
from miraveja_autowire.domain.enums import ResolutionStatus

if TYPE_CHECKING:
    from miraveja_autowire.domain.interfaces import IServiceLookup


class ServiceDefinition(BaseModel):
    """Value object representing a service registered in the container.

    Attributes:
        name: Unique service name, used as the service handle.
        service_type: The type the service is registered under.
        builder: Factory function that receives the container and returns the instance.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Unique name of the service.")
    service_type: Type = Field(..., description="The type the service is registered under.")
    builder: Callable[["IServiceLookup"], Any] = Field(
        ..., description="The builder function to create the service instance."
    )


class PropertyTag(BaseModel):
    """Raw autowire metadata read from a single property.

    Attributes:
        declaring_class: Class whose body declares the property.
        property_name: Attribute name (already mangled for private properties).
        raw_type_annotation: The ``var`` annotation as written, a class or a string reference.
        raw_factory_annotation: The ``factory`` value of the autowire tag, if any.
        raw_arguments: Remaining autowire tag values in declaration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declaring_class: Type = Field(..., description="Class declaring the property.")
    property_name: str = Field(..., description="Name of the property.")
    raw_type_annotation: Any = Field(..., description="Type reference as written.")
    raw_factory_annotation: Any = Field(default=None, description="Factory reference as written.")
    raw_arguments: Tuple[Any, ...] = Field(default=(), description="Factory call arguments.")


class FactoryBinding(BaseModel):
    """A resolved (service, method, arguments) triple producing a property value.

    Attributes:
        service_ref: Handle of the factory service in the container.
        method_name: Name of the factory method to call.
        arguments: Positional arguments passed to the factory method.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service_ref: str = Field(..., description="Handle of the factory service.")
    method_name: str = Field(default="create", description="Factory method name.")
    arguments: Tuple[Any, ...] = Field(default=(), description="Factory call arguments.")


class InjectionPlan(BaseModel):
    """Validated instructions for injecting one property.

    Attributes:
        declaring_class: Class declaring the property.
        property_name: Attribute name written on the instance.
        target_type: Resolved type of the property.
        factory: Factory binding, or None for a direct lookup by type.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declaring_class: Type = Field(..., description="Class declaring the property.")
    property_name: str = Field(..., description="Name of the property.")
    target_type: Type = Field(..., description="Resolved service type.")
    factory: Optional[FactoryBinding] = Field(default=None, description="Factory producing the value.")


class ClassPlan(BaseModel):
    """All injection plans of a class, as stored in the cache.

    Attributes:
        class_identity: Qualified name of the runtime class.
        properties: Injection plans in injection order.
        invalidation_keys: Source files whose change invalidates the plan.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    class_identity: str = Field(..., description="Qualified name of the runtime class.")
    properties: Tuple[InjectionPlan, ...] = Field(default=(), description="Injection plans in order.")
    invalidation_keys: FrozenSet[str] = Field(default=frozenset(), description="Cache dependencies.")


class TypeResolution(BaseModel):
    """Tagged result of resolving a type reference.

    Attributes:
        status: Whether the reference was found.
        resolved_type: The class when found.
        candidates: Names that were tried, in order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: ResolutionStatus
    resolved_type: Optional[Type] = None
    candidates: Tuple[str, ...] = ()

    @classmethod
    def found(cls, resolved_type: Type, candidates: Tuple[str, ...] = ()) -> "TypeResolution":
        return cls(status=ResolutionStatus.FOUND, resolved_type=resolved_type, candidates=candidates)

    @classmethod
    def not_found(cls, candidates: Tuple[str, ...]) -> "TypeResolution":
        return cls(status=ResolutionStatus.NOT_FOUND, candidates=candidates)

    @property
    def is_found(self) -> bool:
        return self.status == ResolutionStatus.FOUND


class AutowireSettings(BaseModel):
    """Configuration of the autowiring pipeline.

    Attributes:
        strict: Enforce component instances and non-private properties.
        component_type: Base type the host framework uses for components.
        ignored_bases: Classes never scanned for properties. Defaults to the
            MRO of ``component_type``.
        cache_namespace: Prefix of the plan cache keys.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    strict: bool = Field(default=True, description="Enable strict visibility and instance checks.")
    component_type: Type = Field(default=Component, description="Host framework component base type.")
    ignored_bases: Optional[FrozenSet[Type]] = Field(default=None, description="Classes never scanned.")
    cache_namespace: str = Field(default="miraveja.autowire.properties", description="Plan cache namespace.")

    def framework_bases(self) -> FrozenSet[Type]:
        """Return the classes whose properties are never autowire candidates."""
        if self.ignored_bases is not None:
            return frozenset(self.ignored_bases) | {object}
        return frozenset(self.component_type.__mro__)
