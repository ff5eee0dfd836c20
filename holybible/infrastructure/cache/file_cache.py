"""File-based implementation of the CacheStore interface.

Each entry is a pickle file named after the SHA-256 of its cache key
(collisions are not defended against). Writes go through a temp file and
os.replace so readers never observe a half-written entry. Expiry is
checked on read; expired or unreadable files are removed by that read.
"""

import hashlib
import logging
import os
import pickle
import tempfile
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.common import CacheKey

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(tempfile.gettempdir()) / "holy_bible_cache"
CACHE_FILE_SUFFIX = ".cache"


@dataclass
class CacheEntry:
    """Internal representation of a cache entry with expiry."""
    key: str
    value: Any
    expires_at: float  # Unix timestamp when the entry expires

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (now if now is not None else time.time()) >= self.expires_at


class FileCacheStore(CacheStore):
    """Persistent cache storing one file per key in a directory."""

    def __init__(self, cache_dir: Optional[Union[str, Path]] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self._lock = threading.RLock()
        self._setup_dir()
        logger.info(f"FileCacheStore initialized at: {self.cache_dir}")

    def _setup_dir(self) -> None:
        """Creates the cache directory if it doesn't exist."""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create cache directory {self.cache_dir}: {e}")
            raise

    def _file_path(self, key: CacheKey) -> Path:
        hashed_key = hashlib.sha256(str(key).encode("utf-8")).hexdigest()
        return self.cache_dir / f"{hashed_key}{CACHE_FILE_SUFFIX}"

    def _remove(self, path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Failed to delete cache file {path}: {e}")
            return False

    # --- CacheStore Interface Implementation ---

    def get(self, key: CacheKey) -> Optional[Any]:
        path = self._file_path(key)
        with self._lock:
            if not path.exists():
                logger.debug(f"Cache miss for key: {key}")
                return None
            try:
                with open(path, "rb") as f:
                    entry = pickle.load(f)
            except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, OSError) as e:
                logger.warning(f"Failed to read cache file {path}: {e}. Removing.")
                self._remove(path)
                return None

            if not isinstance(entry, CacheEntry) or entry.is_expired():
                logger.debug(f"Cache expired for key: {key}. Removing file.")
                self._remove(path)
                return None

            logger.debug(f"Cache hit for key: {key}")
            return entry.value

    def set(self, key: CacheKey, value: Any, ttl: int = 3600) -> bool:
        path = self._file_path(key)
        entry = CacheEntry(key=str(key), value=value, expires_at=time.time() + ttl)
        temp_path = path.with_name(f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
        with self._lock:
            try:
                with open(temp_path, "wb") as f:
                    pickle.dump(entry, f)
                os.replace(temp_path, path)
            except (pickle.PicklingError, TypeError, AttributeError, OSError) as e:
                logger.error(f"Failed to write cache file {path} for key {key}: {e}")
                self._remove(temp_path)
                return False
        logger.debug(f"Stored item in cache: key={key}, ttl={ttl}s")
        return True

    def has(self, key: CacheKey) -> bool:
        return self.get(key) is not None

    def delete(self, key: CacheKey) -> bool:
        with self._lock:
            return self._remove(self._file_path(key))

    def clear(self) -> bool:
        if not self.cache_dir.exists():
            return True
        ok = True
        with self._lock:
            for path in self.cache_dir.glob(f"*{CACHE_FILE_SUFFIX}"):
                if path.is_file():
                    ok = self._remove(path) and ok
        logger.info(f"Cleared file cache at: {self.cache_dir}")
        return ok
