"""Caching implementations for the TW Angpao adaptor."""

from twangpao.infrastructure.cache.memory_cache import MemoryCache

__all__ = ["MemoryCache"]
