import threading
from typing import Dict, Optional

from miraveja_autowire.infrastructure.caching.base import CacheEntry, FingerprintCacheStore
from miraveja_autowire.infrastructure.caching.fingerprint import Fingerprint, file_fingerprint


class MemoryCacheStore(FingerprintCacheStore):
    """Process-local cache store.

    Values are computed outside the lock, so two threads missing the same
    key may both compute it; the last write wins.
    """

    def __init__(self, fingerprint: Fingerprint = file_fingerprint) -> None:
        super().__init__(fingerprint)
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _read(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def _write(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
