import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

from twangpao.adapters.interfaces.cache import CacheEntry, CacheStrategy
from twangpao.core.logging import get_logger

logger = get_logger(__name__)


class MemoryCache(CacheStrategy[str, Any]):
    """
    In-memory implementation of the CacheStrategy interface.

    Expiry is lazy: an expired entry is treated as absent and dropped when it
    is read. There is no background sweep; call ``purge_expired()`` to evict
    actively. When ``max_entries`` is set the least recently used entry is
    evicted on overflow, otherwise the store grows without bound.
    """

    def __init__(
        self,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the in-memory cache.

        Args:
            max_entries: Optional upper bound on stored entries
            clock: Source of the current time in epoch seconds
        """
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be greater than zero")

        self.max_entries = max_entries
        self._clock = clock
        self._cache: "OrderedDict[str, CacheEntry[Any]]" = OrderedDict()
        self._lock = threading.RLock()

        logger.info("In-memory cache initialized")

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    async def get_entry(self, key: str) -> Optional[CacheEntry[Any]]:
        """
        Get a live entry from the cache.

        Args:
            key: Cache key

        Returns:
            The entry, or None if not found or expired
        """
        full_key = self.key_to_string(key)

        with self._lock:
            entry = self._cache.get(full_key)

            if entry is None:
                logger.debug(f"Cache miss for key: {full_key}")
                return None

            if not entry.is_live(self._clock()):
                del self._cache[full_key]
                logger.debug(f"Cache miss (expired) for key: {full_key}")
                return None

            self._cache.move_to_end(full_key)
            logger.debug(f"Cache hit for key: {full_key}")
            return entry

    async def set(self, key: str, value: Any, ttl: float) -> bool:
        """
        Set item in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: TTL in seconds

        Returns:
            True if successful
        """
        full_key = self.key_to_string(key)
        entry = CacheEntry(value, self._clock() + ttl)

        with self._lock:
            self._cache[full_key] = entry
            self._cache.move_to_end(full_key)

            if self.max_entries is not None:
                while len(self._cache) > self.max_entries:
                    evicted, _ = self._cache.popitem(last=False)
                    logger.debug(f"Evicted least recently used key: {evicted}")

        logger.debug(f"Set cache key {full_key} with TTL {ttl}s")
        return True

    async def delete(self, key: str) -> bool:
        """
        Remove item from cache.

        Args:
            key: Cache key

        Returns:
            True if key was found and deleted
        """
        full_key = self.key_to_string(key)

        with self._lock:
            if full_key in self._cache:
                del self._cache[full_key]
                logger.debug(f"Deleted cache key: {full_key}")
                return True

            logger.debug(f"Key not found for deletion: {full_key}")
            return False

    async def clear(self) -> int:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()

        logger.info(f"Flushed all {count} keys from cache")
        return count

    def purge_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._cache.items() if not entry.is_live(now)]

            for key in expired:
                del self._cache[key]

        if expired:
            logger.debug(f"Cleaned up {len(expired)} expired cache items")
        return len(expired)
