"""CacheStore backed by the diskcache library.

diskcache gives process-safe, SQLite-indexed storage. Entries carry their
own expiry timestamp rather than relying on diskcache's expire, so an
expired entry is deleted by the read that finds it, as with every other
store.
"""

import logging
import pickle
import tempfile
import time
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import diskcache as dc

from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.common import CacheKey

logger = logging.getLogger(__name__)

DEFAULT_DISK_CACHE_DIR = Path(tempfile.gettempdir()) / "holy_bible_diskcache"


class DiskCacheStore(CacheStore):
    """Persistent cache using a diskcache.Cache directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None, timeout: float = 1.0):
        self.disk_cache = dc.Cache(str(directory or DEFAULT_DISK_CACHE_DIR), timeout=timeout)
        logger.info(f"DiskCacheStore initialized at: {self.disk_cache.directory}")

    def get(self, key: CacheKey) -> Optional[Any]:
        with self.disk_cache.transact():
            stored: Optional[Tuple[float, Any]] = self.disk_cache.get(str(key), default=None)
            if stored is None:
                logger.debug(f"Cache miss for key: {key}")
                return None
            expires_at, value = stored
            if time.time() >= expires_at:
                logger.debug(f"Cache expired for key: {key}. Removing.")
                self.disk_cache.delete(str(key))
                return None
        logger.debug(f"Cache hit for key: {key}")
        return value

    def set(self, key: CacheKey, value: Any, ttl: int = 3600) -> bool:
        try:
            return bool(self.disk_cache.set(str(key), (time.time() + ttl, value)))
        except (dc.Timeout, OSError, TypeError, AttributeError, pickle.PicklingError) as e:
            logger.error(f"Error putting into disk cache (key: {key}): {e}", exc_info=True)
            return False

    def has(self, key: CacheKey) -> bool:
        return self.get(key) is not None

    def delete(self, key: CacheKey) -> bool:
        self.disk_cache.delete(str(key))
        return True

    def clear(self) -> bool:
        count = self.disk_cache.clear()
        logger.info(f"Cleared disk cache. Removed {count} items.")
        return True

    def close(self) -> None:
        self.disk_cache.close()
