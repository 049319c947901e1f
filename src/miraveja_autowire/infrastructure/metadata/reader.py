import inspect
from typing import Any, Dict, List, Type

from miraveja_autowire.domain import IMetadataReader
from miraveja_autowire.infrastructure.metadata.tags import TagSet


class ClassMetadataReader(IMetadataReader):
    """Reads tags from ``TagSet`` markers and Python annotations.

    Properties expose their annotation as the ``var`` tag, methods expose
    their return annotation as the ``return`` tag. Annotations are read raw,
    so string annotations (including ``from __future__ import annotations``)
    are returned unevaluated.
    """

    def properties(self, owner: Type) -> List[str]:
        names = list(self._annotations(owner))
        for name, value in vars(owner).items():
            if isinstance(value, TagSet) and name not in names:
                names.append(name)
        return names

    def declared_tags(self, owner: Type, member: str) -> Dict[str, Dict[Any, Any]]:
        value = vars(owner).get(member)
        if isinstance(value, (staticmethod, classmethod)):
            value = value.__func__

        if inspect.isfunction(value):
            annotations = self._annotations(value)
            return {"return": {0: annotations["return"]}} if "return" in annotations else {}

        tags: Dict[str, Dict[Any, Any]] = {}
        annotations = self._annotations(owner)
        if member in annotations:
            tags["var"] = {0: annotations[member]}
        if isinstance(value, TagSet):
            tags.update(value.tags)
        return tags

    @staticmethod
    def _annotations(obj: Any) -> Dict[str, Any]:
        """Return the annotations declared directly on a class or function."""
        return dict(inspect.get_annotations(obj))
