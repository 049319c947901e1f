import logging
from abc import abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from miraveja_autowire.domain import ICacheStore
from miraveja_autowire.infrastructure.caching.fingerprint import Fingerprint, file_fingerprint

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    """A cached value with the fingerprints of its dependencies.

    Attributes:
        value: The cached value.
        dependencies: Fingerprint of each dependency at the time the value was computed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = Field(..., description="The cached value.")
    dependencies: Dict[str, Optional[str]] = Field(default_factory=dict, description="Dependency fingerprints.")


class FingerprintCacheStore(ICacheStore):
    """Cache store that recomputes a value when a dependency changes.

    Subclasses only provide entry storage; freshness is checked here by
    fingerprinting every dependency again on each load.

    Attributes:
        _fingerprint: Function identifying the current version of a dependency.
    """

    def __init__(self, fingerprint: Fingerprint = file_fingerprint) -> None:
        self._fingerprint = fingerprint

    def load_or_compute(self, key: str, compute: Callable[[], Tuple[Any, Iterable[str]]]) -> Any:
        entry = self._read(key)
        if entry is not None and self._is_fresh(entry):
            logger.debug("Cache hit for %s", key)
            return entry.value

        logger.debug("Cache %s for %s", "stale entry" if entry is not None else "miss", key)
        value, dependencies = compute()
        return self.save(key, value, dependencies)

    def compute_cached(self, key: str, dependencies: Iterable[str], compute: Callable[[], Any]) -> Any:
        """Cache a value whose dependencies are known before computing it.

        Args:
            key: Cache key.
            dependencies: File paths whose change invalidates the value.
            compute: Called on a miss; returns the value.
        """
        dependencies = list(dependencies)
        return self.load_or_compute(key, lambda: (compute(), dependencies))

    def save(self, key: str, value: Any, dependencies: Iterable[str]) -> Any:
        """Store a value with the current fingerprints of its dependencies."""
        entry = CacheEntry(
            value=value,
            dependencies={path: self._fingerprint(path) for path in dependencies},
        )
        self._write(key, entry)
        return value

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return all(self._fingerprint(path) == known for path, known in entry.dependencies.items())

    @abstractmethod
    def _read(self, key: str) -> Optional[CacheEntry]:
        """Return the stored entry for a key, or None."""

    @abstractmethod
    def _write(self, key: str, entry: CacheEntry) -> None:
        """Store the entry for a key."""
