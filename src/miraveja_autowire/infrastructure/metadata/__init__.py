"""
Metadata module.

Provides the declarative tag markers and the reader that exposes them to the extractor.
"""

from .reader import ClassMetadataReader
from .tags import TagSet, autowire, tag

__all__ = [
    "ClassMetadataReader",
    "TagSet",
    "tag",
    "autowire",
]
