"""
Caching module.

Provides cache stores that recompute values when the files they depend on change.
"""

from .base import CacheEntry, FingerprintCacheStore
from .file import FileCacheStore
from .fingerprint import content_fingerprint, file_fingerprint
from .memory import MemoryCacheStore

__all__ = [
    "CacheEntry",
    "FingerprintCacheStore",
    "MemoryCacheStore",
    "FileCacheStore",
    "file_fingerprint",
    "content_fingerprint",
]
