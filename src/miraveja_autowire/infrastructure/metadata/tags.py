from typing import Any, Dict, Optional, Tuple, Type


class TagSet:
    """Class attribute marker carrying declarative tags of a property.

    Tags are kept in declaration order. Each tag value is a mapping where
    positional arguments are stored under integer keys and keyword arguments
    under their names, both in call order.

    Reading the attribute through an instance raises ``AttributeError`` until
    the injector has written the real value into the instance.

    Example:
        >>> class HomePage(Component):
        ...     logger: Logger = autowire()
        ...     widget: Widget = autowire(factory="WidgetFactory::build", size=3)
        ...     legacy: Logger = tag("deprecated").tag("autowire")
    """

    __slots__ = ("_tags", "_name")

    def __init__(self, tags: Tuple[Tuple[str, Dict[Any, Any]], ...] = ()) -> None:
        self._tags = tags
        self._name: Optional[str] = None

    def tag(self, name: str, *args: Any, **kwargs: Any) -> "TagSet":
        """Return a new marker with one more tag appended.

        Args:
            name: Tag name.
            *args: Positional tag values.
            **kwargs: Named tag values.
        """
        value: Dict[Any, Any] = dict(enumerate(args))
        value.update(kwargs)
        return TagSet(self._tags + ((name, value),))

    @property
    def tags(self) -> Dict[str, Dict[Any, Any]]:
        """Copy of the tags, keyed by tag name."""
        return {name: dict(value) for name, value in self._tags}

    def __set_name__(self, owner: Type, name: str) -> None:
        self._name = name

    def __get__(self, obj: Optional[object], objtype: Optional[Type] = None) -> Any:
        if obj is None:
            return self
        raise AttributeError(f"'{type(obj).__name__}' object has no attribute '{self._name}' (not autowired yet)")

    def __repr__(self) -> str:
        return f"TagSet({', '.join(name for name, _ in self._tags)})"


def tag(name: str, *args: Any, **kwargs: Any) -> TagSet:
    """Declare a tag on a property.

    Args:
        name: Tag name.
        *args: Positional tag values.
        **kwargs: Named tag values.

    Returns:
        A marker to assign as the property's class attribute.
    """
    return TagSet().tag(name, *args, **kwargs)


def autowire(*args: Any, **kwargs: Any) -> TagSet:
    """Mark a property for autowiring.

    Args:
        *args: Factory call arguments.
        **kwargs: ``factory="Type::method"`` plus named factory call arguments.

    Example:
        >>> class HomePage(Component):
        ...     logger: Logger = autowire()
        ...     widget: Widget = autowire(factory="WidgetFactory::build")
    """
    return tag("autowire", *args, **kwargs)
