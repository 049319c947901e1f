import logging
from typing import Any, Optional, Tuple, Type

from miraveja_autowire.application.type_resolver import TypeReferenceResolver
from miraveja_autowire.domain import (
    FactoryBinding,
    IMetadataReader,
    InjectionPlan,
    IServiceLookup,
    MissingServiceError,
    PropertyTag,
    TagValidationError,
    TypeMismatchError,
)
from miraveja_autowire.domain.exceptions import describe_member, describe_type

logger = logging.getLogger(__name__)

DEFAULT_FACTORY_METHOD = "create"
FACTORY_METHOD_SEPARATOR = "::"


class PropertyResolver:
    """Turns raw property tags into validated injection plans.

    Direct plans only check that a service is registered for the property
    type. Factory plans resolve the factory service and verify that the
    factory method's declared return type is the property type. No service is
    instantiated while resolving.

    Attributes:
        _lookup: Container used to find registered services.
        _reader: Collaborator reading the factory method's return annotation.
        _types: Resolver for written type references.
    """

    def __init__(
        self,
        lookup: IServiceLookup,
        reader: IMetadataReader,
        types: Optional[TypeReferenceResolver] = None,
    ) -> None:
        self._lookup = lookup
        self._reader = reader
        self._types = types or TypeReferenceResolver()

    def resolve(self, tag: PropertyTag) -> InjectionPlan:
        """Resolve a property tag to an injection plan.

        Args:
            tag: Raw metadata of an autowired property.

        Returns:
            A direct-lookup plan, or a factory plan when the tag names a factory.

        Raises:
            MissingTypeError: If the property or factory type cannot be resolved.
            MissingServiceError: If no service is registered for the property or factory type.
            TypeMismatchError: If the factory creates a different type than the property requires.
            TagValidationError: If the factory method is missing or has no return annotation.

        Example:
            >>> class HomePage(Component):
            ...     widget: Widget = autowire(factory="WidgetFactory::build", size=3)
            >>> plan = resolver.resolve(extractor.extract(HomePage)[0])
            >>> plan.factory.method_name, plan.factory.arguments
            ('build', (3,))
        """
        owner, name = tag.declaring_class, tag.property_name
        target_type = self._types.resolve(tag.raw_type_annotation, owner, name, "var")

        if tag.raw_factory_annotation is None:
            if self._lookup.find_service_type(target_type) is None:
                raise MissingServiceError(
                    target_type,
                    f'Service of type "{describe_type(target_type)}" not found for '
                    f"{describe_member(owner, name)} in annotation @var.",
                    declaring_class=owner,
                    member=name,
                    annotation="var",
                )
            return InjectionPlan(declaring_class=owner, property_name=name, target_type=target_type)

        factory = self._resolve_factory(tag, target_type)
        logger.debug(
            "Property %s is created by %s::%s",
            describe_member(owner, name),
            factory.service_ref,
            factory.method_name,
        )
        return InjectionPlan(declaring_class=owner, property_name=name, target_type=target_type, factory=factory)

    def _resolve_factory(self, tag: PropertyTag, target_type: Type) -> FactoryBinding:
        owner, name = tag.declaring_class, tag.property_name
        factory_reference, method_name = self._split_factory(tag.raw_factory_annotation)
        factory_type = self._types.resolve(factory_reference, owner, name, "autowire")

        handle = self._lookup.find_service_type(factory_type)
        if handle is None:
            raise MissingServiceError(
                factory_type,
                f'Factory of type "{describe_type(factory_type)}" not found for '
                f"{describe_member(owner, name)} in annotation @autowire.",
                declaring_class=owner,
                member=name,
                annotation="autowire",
            )

        creates = self._return_type(factory_type, method_name, owner, name)
        if creates is not target_type:
            raise TypeMismatchError(target_type, creates, factory_type, declaring_class=owner, member=name)

        return FactoryBinding(service_ref=handle, method_name=method_name, arguments=tag.raw_arguments)

    def _return_type(self, factory_type: Type, method_name: str, owner: Type, name: str) -> Type:
        """Resolve the declared return type of a factory method."""
        method_owner = next((klass for klass in factory_type.__mro__ if method_name in vars(klass)), None)
        if method_owner is None or not callable(getattr(factory_type, method_name, None)):
            raise TagValidationError(
                f'Factory "{describe_type(factory_type)}" has no method {method_name}() required by '
                f"{describe_member(owner, name)} in annotation @autowire.",
                declaring_class=owner,
                member=name,
                annotation="autowire",
            )

        raw_return = self._reader.declared_tags(method_owner, method_name).get("return", {}).get(0)
        return self._types.resolve(raw_return, method_owner, f"{method_name}()", "return")

    @staticmethod
    def _split_factory(reference: Any) -> Tuple[Any, str]:
        """Split ``"Type::method"`` into the type reference and the method name."""
        if isinstance(reference, str) and FACTORY_METHOD_SEPARATOR in reference:
            factory_reference, method_name = reference.split(FACTORY_METHOD_SEPARATOR, 1)
            return factory_reference, method_name or DEFAULT_FACTORY_METHOD
        return reference, DEFAULT_FACTORY_METHOD
