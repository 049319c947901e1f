import inspect
import logging
from typing import Any, Dict, List, Optional, Set, Type

from miraveja_autowire.domain import (
    AccessError,
    AutowireSettings,
    IMetadataReader,
    PropertyTag,
    TagValidationError,
    Visibility,
)
from miraveja_autowire.domain.exceptions import describe_member

logger = logging.getLogger(__name__)

AUTOWIRE_TAG = "autowire"
AUTOWIRE_SPELLINGS = ("autowire", "autowired")
FACTORY_ARGUMENT = "factory"


def visibility_of(owner: Type, name: str) -> Visibility:
    """Classify an attribute name declared on a class.

    Args:
        owner: Class declaring the attribute.
        name: Attribute name as stored in the class ``__dict__``.
    """
    if name.startswith(f"_{owner.__name__.lstrip('_')}__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def source_marker(cls: Type) -> Optional[str]:
    """Return the source file of a class, or None when it has none.

    Builtin classes raise ``TypeError`` and classes of a module without a
    file, such as ``__main__`` in an interactive session, raise ``OSError``.
    """
    try:
        return inspect.getfile(cls)
    except (TypeError, OSError):
        return None


class MetadataExtractor:
    """Collects the autowire tags of a class and its ancestors.

    Walks the MRO of the class, skipping the framework base classes, and
    produces one ``PropertyTag`` per property carrying the ``autowire`` tag.

    Attributes:
        _reader: Collaborator reading declared tags.
        _settings: Strict mode and framework base classes.
        _container: Container whose source file is tracked for invalidation.
    """

    def __init__(self, reader: IMetadataReader, settings: AutowireSettings, container: object) -> None:
        self._reader = reader
        self._settings = settings
        self._container = container

    def scanned_classes(self, cls: Type) -> List[Type]:
        """Return the classes of the MRO whose properties are scanned, most derived first."""
        ignored = self._settings.framework_bases()
        return [klass for klass in cls.__mro__ if klass not in ignored]

    def extract(self, cls: Type) -> List[PropertyTag]:
        """Extract the autowire tags of every property of a class.

        Args:
            cls: The runtime class of the object to autowire.

        Returns:
            Property tags in scan order (most derived class first, then
            declaration order).

        Raises:
            TagValidationError: If an autowire tag is miscased or the property has no type.
            AccessError: In strict mode, if an autowired property is private.

        Example:
            >>> class HomePage(Component):
            ...     logger: Logger = autowire()
            >>> extractor.extract(HomePage)
            [PropertyTag(declaring_class=HomePage, property_name='logger', ...)]
        """
        result: List[PropertyTag] = []
        seen: Set[str] = set()

        for klass in self.scanned_classes(cls):
            for name in self._reader.properties(klass):
                # Overridden in a more derived class
                if name in seen:
                    continue
                seen.add(name)

                tags = self._reader.declared_tags(klass, name)
                autowire_value = self._autowire_value(klass, name, tags)
                if autowire_value is None:
                    continue

                result.append(self._build_tag(klass, name, tags, autowire_value))

        logger.debug("Extracted %d autowired properties from %s", len(result), cls.__qualname__)
        return result

    def invalidation_keys(self, cls: Type) -> List[str]:
        """Return the source files whose change invalidates the plan of a class.

        Args:
            cls: The runtime class of the object to autowire.
        """
        keys: List[str] = []
        for klass in self.scanned_classes(cls) + [type(self._container)]:
            marker = source_marker(klass)
            if marker is not None and marker not in keys:
                keys.append(marker)
        return keys

    def _autowire_value(self, owner: Type, name: str, tags: Dict[str, Dict[Any, Any]]) -> Optional[Dict[Any, Any]]:
        """Return the value of the autowire tag, or None when the property is not autowired."""
        for tag_name, value in tags.items():
            if tag_name.lower() not in AUTOWIRE_SPELLINGS:
                continue

            if tag_name != AUTOWIRE_TAG:
                raise TagValidationError(
                    f"Annotation @{tag_name} on {describe_member(owner, name)} "
                    f"should be fixed to lowercase @{AUTOWIRE_TAG}.",
                    declaring_class=owner,
                    member=name,
                    annotation=tag_name,
                )

            if self._settings.strict and visibility_of(owner, name) == Visibility.PRIVATE:
                raise AccessError(
                    "Autowired properties must be protected or public. Please fix visibility of "
                    f"{describe_member(owner, name)} or remove the @{AUTOWIRE_TAG} annotation.",
                    declaring_class=owner,
                    member=name,
                    annotation=tag_name,
                )

            return value
        return None

    @staticmethod
    def _build_tag(owner: Type, name: str, tags: Dict[str, Dict[Any, Any]], autowire_value: Dict[Any, Any]) -> PropertyTag:
        raw_type = tags.get("var", {}).get(0)
        if raw_type is None or raw_type == "":
            raise TagValidationError(
                f"Missing annotation @var with typehint on {describe_member(owner, name)}.",
                declaring_class=owner,
                member=name,
                annotation="var",
            )

        factory = autowire_value.get(FACTORY_ARGUMENT) or None
        arguments = tuple(value for key, value in autowire_value.items() if key != FACTORY_ARGUMENT)
        return PropertyTag(
            declaring_class=owner,
            property_name=name,
            raw_type_annotation=raw_type,
            raw_factory_annotation=factory,
            raw_arguments=arguments,
        )
