import builtins
import inspect
import pkgutil
from typing import Any, Optional, Tuple, Type

from miraveja_autowire.domain import MissingTypeError, TagValidationError, TypeResolution
from miraveja_autowire.domain.exceptions import describe_member

ROOT_SEPARATOR = ":"


class TypeReferenceResolver:
    """Resolves written type references to classes.

    A reference is either a class object or a string:

    - ``"package.module:Name"`` is rooted and tried as given only.
    - Anything else is tried as given (a bare name against ``builtins``, a
      dotted name as an absolute import path) and then relative to the module
      of the declaring class, which also reaches nested classes such as
      ``"Outer.Inner"``.
    """

    def lookup(self, reference: Any, namespace: str) -> TypeResolution:
        """Try to resolve a reference without raising.

        Args:
            reference: The class or string reference as written.
            namespace: Module name the reference was written in.

        Returns:
            A found resolution carrying the class, or a not-found one listing
            every candidate that was tried.
        """
        if inspect.isclass(reference):
            return TypeResolution.found(reference)

        text = str(reference).strip()
        candidates: Tuple[str, ...] = (text,)
        if ROOT_SEPARATOR not in text:
            candidates += (f"{namespace}{ROOT_SEPARATOR}{text}",)

        for candidate in candidates:
            found = self._load(candidate)
            if found is not None:
                return TypeResolution.found(found, candidates)
        return TypeResolution.not_found(candidates)

    def resolve(self, reference: Any, declaring_class: Type, member: str, annotation: str) -> Type:
        """Resolve a reference written on a class member, raising on failure.

        Args:
            reference: The class or string reference as written.
            declaring_class: Class declaring the member, whose module is the fallback namespace.
            member: Property or method name, for error messages.
            annotation: Annotation holding the reference (``var``, ``autowire``, ``return``).

        Raises:
            TagValidationError: If the reference is empty or neither a class nor a string.
            MissingTypeError: If no candidate resolves to a class.
        """
        if reference is None or reference == "":
            raise TagValidationError(
                f"Missing annotation @{annotation} with typehint on {describe_member(declaring_class, member)}.",
                declaring_class=declaring_class,
                member=member,
                annotation=annotation,
            )
        if not isinstance(reference, str) and not inspect.isclass(reference):
            raise TagValidationError(
                f"Annotation @{annotation} on {describe_member(declaring_class, member)} must be a class "
                f"or a string reference, got {reference!r}.",
                declaring_class=declaring_class,
                member=member,
                annotation=annotation,
            )

        resolution = self.lookup(reference, declaring_class.__module__)
        if not resolution.is_found:
            raise MissingTypeError(
                str(reference),
                resolution.candidates,
                declaring_class=declaring_class,
                member=member,
                annotation=annotation,
            )
        return resolution.resolved_type

    @staticmethod
    def _load(name: str) -> Optional[Type]:
        if "." not in name and ROOT_SEPARATOR not in name:
            found = getattr(builtins, name, None)
        else:
            try:
                found = pkgutil.resolve_name(name)
            except (ImportError, AttributeError, ValueError):
                return None
        return found if inspect.isclass(found) else None
