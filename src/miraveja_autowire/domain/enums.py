from enum import Enum


class ResolutionStatus(str, Enum):
    """Outcome of looking up a type reference.

    Attributes:
        FOUND: The reference points to an existing class.
        NOT_FOUND: No candidate for the reference could be loaded.
    """

    FOUND = "found"
    NOT_FOUND = "not_found"

    def __str__(self) -> str:
        return self.value


class Visibility(str, Enum):
    """Python visibility conventions for class attributes.

    Attributes:
        PUBLIC: Plain attribute name.
        PROTECTED: Single leading underscore.
        PRIVATE: Name-mangled attribute (``__name`` inside the class body).
    """

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    def __str__(self) -> str:
        return self.value
