from typing import Optional, Sequence, Type


def describe_type(cls: Type) -> str:
    """Return the fully qualified name used in error messages."""
    return f"{cls.__module__}.{cls.__qualname__}"


def describe_member(declaring_class: Optional[Type], member: Optional[str]) -> str:
    """Return ``Class.member`` for error messages."""
    if declaring_class is None:
        return member or "<unknown>"
    return f"{declaring_class.__qualname__}.{member}"


class AutowireError(Exception):
    """Base exception for property autowiring errors.

    Attributes:
        declaring_class: Class declaring the offending property or method.
        member: Name of the offending property or method.
        annotation: Name of the annotation being processed (``var``, ``autowire``, ``return``).
    """

    def __init__(
        self,
        message: str,
        *,
        declaring_class: Optional[Type] = None,
        member: Optional[str] = None,
        annotation: Optional[str] = None,
    ) -> None:
        self.declaring_class = declaring_class
        self.member = member
        self.annotation = annotation
        super().__init__(message)


class AccessError(AutowireError):
    """Raised when a visibility or instance-type precondition is violated.

    This occurs in strict mode when:
    - An autowired property is private (name-mangled).
    - The injected object is not a host framework component.
    """


class TagValidationError(AutowireError):
    """Raised for malformed declarative tags.

    This occurs when:
    - The autowire tag is not spelled exactly ``autowire``.
    - A property has no type annotation.
    - A factory method is missing or lacks a return annotation.
    """


class MissingTypeError(AutowireError):
    """Raised when a type reference cannot be resolved to a class.

    Attributes:
        reference: The reference as it was written.
        candidates: Every name that was tried, in order.
    """

    def __init__(
        self,
        reference: str,
        candidates: Sequence[str],
        *,
        declaring_class: Optional[Type] = None,
        member: Optional[str] = None,
        annotation: Optional[str] = None,
    ) -> None:
        self.reference = reference
        self.candidates = tuple(candidates)
        where = f"{describe_member(declaring_class, member)} in annotation @{annotation}"
        if len(self.candidates) == 1:
            message = f'Class "{self.candidates[0]}" was not found, please check the typehint on {where}.'
        else:
            names = " or ".join(f'"{candidate}"' for candidate in self.candidates)
            message = f"Neither class {names} was found, please check the typehint on {where}."
        super().__init__(message, declaring_class=declaring_class, member=member, annotation=annotation)


class MissingServiceError(AutowireError):
    """Raised when no service is registered for a resolved type or name.

    Attributes:
        service_type: The type (or service name) that has no registration.
    """

    def __init__(
        self,
        service_type: object,
        reason: Optional[str] = None,
        *,
        declaring_class: Optional[Type] = None,
        member: Optional[str] = None,
        annotation: Optional[str] = None,
    ) -> None:
        self.service_type = service_type
        label = describe_type(service_type) if isinstance(service_type, type) else str(service_type)
        if reason is None:
            reason = f'Service "{label}" is not registered.'
        super().__init__(reason, declaring_class=declaring_class, member=member, annotation=annotation)


class TypeMismatchError(AutowireError):
    """Raised when a factory creates a different type than the property requires.

    Attributes:
        expected: Type declared by the property.
        produced: Return type declared by the factory method.
        factory_type: Class of the factory service.
    """

    def __init__(
        self,
        expected: Type,
        produced: Type,
        factory_type: Type,
        *,
        declaring_class: Optional[Type] = None,
        member: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.produced = produced
        self.factory_type = factory_type
        message = (
            f"The property {describe_member(declaring_class, member)} requires {describe_type(expected)}, "
            f"but factory of type {describe_type(factory_type)}, that creates {describe_type(produced)} "
            "was provided."
        )
        super().__init__(message, declaring_class=declaring_class, member=member, annotation="autowire")
