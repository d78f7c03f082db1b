"""Expiring cache utilities.

Main components:
- Cache: facade that derives keys from a namespace and call parameters
- CacheBackend implementations: InMemoryBackend, RedisBackend, NullBackend
"""

from pokedexdb.utils.cache.backends import (
    CacheBackend,
    InMemoryBackend,
    NullBackend,
    RedisBackend,
)
from pokedexdb.utils.cache.cache import Cache

__all__ = [
    "Cache",
    "CacheBackend",
    "InMemoryBackend",
    "NullBackend",
    "RedisBackend",
]
