"""Cache store that never stores anything.

Stands in for a real store when caching is disabled, so callers never
branch on whether caching is on.
"""

from typing import Any, Optional

from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.common import CacheKey


class NullCacheStore(CacheStore):
    """No-op implementation of CacheStore."""

    def get(self, key: CacheKey) -> Optional[Any]:
        return None

    def set(self, key: CacheKey, value: Any, ttl: int = 3600) -> bool:
        return True

    def has(self, key: CacheKey) -> bool:
        return False

    def delete(self, key: CacheKey) -> bool:
        return True

    def clear(self) -> bool:
        return True
