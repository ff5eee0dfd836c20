"""Interface for cache stores.

Defines the contract for storing, retrieving, and managing cached API
results with per-entry expiry. Expiry is evaluated lazily on read: an
expired entry is reported as absent and removed by that same read.
"""

import abc
from typing import Any, Optional

from ..models.common import CacheKey


class CacheStore(abc.ABC):
    """Abstract Base Class for cache operations.

    Implementations must make each per-key operation atomic so that a
    concurrent get and set on the same key never corrupt the stored entry.
    """

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[Any]:
        """Retrieves an item from the cache.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item if found and not expired, otherwise None.
        """
        pass

    @abc.abstractmethod
    def set(self, key: CacheKey, value: Any, ttl: int = 3600) -> bool:
        """Stores an item in the cache.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl: Time-to-live in seconds.

        Returns:
            True if the item was stored.
        """
        pass

    @abc.abstractmethod
    def has(self, key: CacheKey) -> bool:
        """Checks whether a non-expired entry exists for the key."""
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> bool:
        """Deletes an item. Deleting a missing key succeeds."""
        pass

    @abc.abstractmethod
    def clear(self) -> bool:
        """Clears all items from the cache."""
        pass

    def close(self) -> None:
        """Releases resources held by the store. Stores without any keep the default."""
        pass
