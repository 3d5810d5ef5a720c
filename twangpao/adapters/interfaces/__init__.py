"""
Interfaces for the adapters package.

Abstract contracts that concrete implementations must satisfy.
"""

from .cache import CacheEntry, CacheStrategy

__all__ = [
    'CacheEntry',
    'CacheStrategy',
]
