import hashlib
import logging
import os
import pickle
import tempfile
from pathlib import Path
from typing import Optional, Union

from miraveja_autowire.infrastructure.caching.base import CacheEntry, FingerprintCacheStore
from miraveja_autowire.infrastructure.caching.fingerprint import Fingerprint, file_fingerprint

logger = logging.getLogger(__name__)


class FileCacheStore(FingerprintCacheStore):
    """Cache store persisting entries as pickle files in a directory.

    Every key is stored in its own file named after the SHA-1 digest of the
    key. Files are replaced atomically, so readers never see a partial entry.
    Entries that cannot be unpickled are treated as missing, and values that
    cannot be pickled are returned without being stored.

    Attributes:
        directory: Directory holding the entry files.

    Example:
        >>> store = FileCacheStore("/var/cache/app/autowire")
        >>> injector = create_injector(container, cache_store=store)
    """

    SUFFIX = ".cache"

    def __init__(self, directory: Union[str, Path], fingerprint: Fingerprint = file_fingerprint) -> None:
        super().__init__(fingerprint)
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Return the file holding the entry of a key."""
        return self.directory / (hashlib.sha1(key.encode("utf-8")).hexdigest() + self.SUFFIX)

    def _read(self, key: str) -> Optional[CacheEntry]:
        path = self.path_for(key)
        try:
            with path.open("rb") as handle:
                entry = pickle.load(handle)
        except FileNotFoundError:
            return None
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", path, e)
            return None

        return entry if isinstance(entry, CacheEntry) else None

    def _write(self, key: str, entry: CacheEntry) -> None:
        path = self.path_for(key)
        descriptor, temporary = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(descriptor, "wb") as handle:
                pickle.dump(entry, handle, protocol=pickle.HIGHEST_PROTOCOL)
            os.replace(temporary, path)
        except (pickle.PicklingError, AttributeError, TypeError) as e:
            # Local classes and lambdas cannot be pickled; the value is still returned.
            os.unlink(temporary)
            logger.warning("Not caching %s, entry cannot be pickled: %s", key, e)
        except BaseException:
            os.unlink(temporary)
            raise

    def clear(self) -> None:
        for path in self.directory.glob(f"*{self.SUFFIX}"):
            path.unlink(missing_ok=True)
