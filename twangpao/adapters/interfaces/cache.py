from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

# Type variables for generics
K = TypeVar('K')  # Generic type for cache keys
V = TypeVar('V')  # Generic type for cache values


class CacheEntry(Generic[V]):
    """A cached value together with its absolute expiry timestamp."""

    __slots__ = ("data", "expiry")

    def __init__(self, data: V, expiry: float):
        self.data = data
        self.expiry = expiry

    def is_live(self, now: float) -> bool:
        """An entry is a hit only strictly before its expiry."""
        return now < self.expiry

    def __repr__(self) -> str:
        return f"CacheEntry(data={self.data!r}, expiry={self.expiry!r})"


class CacheStrategy(Generic[K, V], ABC):
    """
    Abstract base interface for response caches.

    This interface defines the contract the redeem service relies on, so a
    store can be swapped without touching the orchestration logic.

    Type Parameters:
        K: The type of keys used for cache entries
        V: The type of values stored in the cache
    """

    @abstractmethod
    async def get_entry(self, key: K) -> Optional[CacheEntry[V]]:
        """
        Retrieves a live entry by key.

        Args:
            key: The key of the entry to retrieve

        Returns:
            Optional[CacheEntry[V]]: The entry if present and not expired, None otherwise
        """
        pass

    async def get(self, key: K) -> Optional[V]:
        """
        Retrieves a cached value by key.

        Args:
            key: The key of the item to retrieve

        Returns:
            Optional[V]: The cached value if found, None otherwise
        """
        entry = await self.get_entry(key)
        return entry.data if entry is not None else None

    @abstractmethod
    async def set(self, key: K, value: V, ttl: float) -> bool:
        """
        Stores an item in the cache, replacing any previous entry.

        Args:
            key: The key to store the value under
            value: The value to store
            ttl: Time-to-live in seconds

        Returns:
            bool: True if successfully cached, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: K) -> bool:
        """
        Removes an item from the cache.

        Args:
            key: The key of the item to remove

        Returns:
            bool: True if the key was present and removed
        """
        pass

    async def exists(self, key: K) -> bool:
        """Checks if a live entry exists for the key."""
        return await self.get_entry(key) is not None

    @abstractmethod
    async def clear(self) -> int:
        """
        Clears the cache.

        Returns:
            int: Number of entries removed
        """
        pass

    def key_to_string(self, key: Any) -> str:
        """Converts a key to a string representation for storage."""
        if isinstance(key, str):
            return key
        return str(key)
