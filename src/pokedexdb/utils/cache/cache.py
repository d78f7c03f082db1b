"""Cache facade used by the query, aggregation and lineage routes.

Keys are derived from a namespace plus the full parameter signature of the
call, so two requests with the same filters share an entry. Backend failures
are logged and treated as misses; a broken cache never fails a request.
"""

import hashlib
import json
import logging
from typing import Any

from pokedexdb.config.models import CacheConfig
from pokedexdb.utils.cache.backends import (
    CacheBackend,
    InMemoryBackend,
    NullBackend,
    RedisBackend,
)

logger = logging.getLogger(__name__)

KEY_PREFIX = "pokedexdb"


class Cache:
    """Expiring key-value cache over a pluggable backend."""

    def __init__(self, backend: CacheBackend | None = None, default_ttl: int = 60):
        """Initialize cache.

        Args:
            backend: Storage backend; defaults to an in-memory store
            default_ttl: TTL in seconds used when set() is given none
        """
        self._backend = backend if backend is not None else InMemoryBackend()
        self.default_ttl = default_ttl
        self.backend_type = type(self._backend).__name__
        self._stats = {"hits": 0, "misses": 0, "sets": 0, "errors": 0}

    @classmethod
    def from_config(cls, config: CacheConfig) -> "Cache":
        """Build a cache from the configured backend name."""
        backend: CacheBackend
        if config.backend == "redis":
            backend = RedisBackend(
                host=config.redis_host, port=config.redis_port, db=config.redis_db
            )
        elif config.backend == "none":
            backend = NullBackend()
        else:
            backend = InMemoryBackend(max_entries=config.memory_max_entries)
        logger.info("Cache initialized with %s backend", config.backend)
        return cls(backend=backend, default_ttl=config.default_ttl)

    def _generate_cache_key(self, namespace: str, **kwargs: Any) -> str:  # noqa: ANN401
        """Generate a consistent cache key from namespace and parameters.

        None-valued parameters are omitted so an absent filter and an
        explicit None share a key.
        """
        params = {key: value for key, value in kwargs.items() if value is not None}
        # Strings are quoted in JSON, so a value cannot spell out another parameter
        encoded = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
        digest = hashlib.sha256(encoded.encode()).hexdigest()[:16]
        return f"{KEY_PREFIX}:{namespace}:{digest}"

    def get(self, namespace: str, **kwargs: Any) -> Any:  # noqa: ANN401
        """Get cached value by namespace and parameters, or None on a miss."""
        cache_key = self._generate_cache_key(namespace, **kwargs)
        try:
            result = self._backend.get(cache_key)
        except Exception as e:
            self._stats["errors"] += 1
            logger.error("Cache get error in %s: %s", namespace, e)
            return None

        if result is None:
            self._stats["misses"] += 1
            logger.debug("Cache miss %s", cache_key)
            return None
        self._stats["hits"] += 1
        logger.debug("Cache hit %s", cache_key)
        return result

    def set(self, namespace: str, value: Any, ttl: int | None = None, **kwargs: Any) -> bool:  # noqa: ANN401
        """Store a JSON-serializable value under namespace and parameters.

        Returns:
            True if stored, False if the backend failed
        """
        cache_key = self._generate_cache_key(namespace, **kwargs)
        cache_ttl = ttl or self.default_ttl
        try:
            result = self._backend.set(cache_key, value, cache_ttl)
        except Exception as e:
            self._stats["errors"] += 1
            logger.error("Cache set error in %s: %s", namespace, e)
            return False
        if result:
            self._stats["sets"] += 1
        return result

    def clear(self) -> bool:
        """Clear all cached data."""
        try:
            result = self._backend.clear()
        except Exception as e:
            self._stats["errors"] += 1
            logger.error("Cache clear error: %s", e)
            return False
        if result:
            logger.info("Cache cleared")
        return result

    def ping(self) -> bool:
        """Test backend connectivity."""
        try:
            return self._backend.ping()
        except Exception as e:
            logger.debug("Cache ping failed: %s", e)
            return False

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics including hit rate."""
        total_requests = self._stats["hits"] + self._stats["misses"]
        hit_rate = self._stats["hits"] / total_requests if total_requests > 0 else 0.0
        return {
            **self._stats,
            "hit_rate": round(hit_rate * 100, 2),
            "total_requests": total_requests,
            "backend": self.backend_type,
        }

    def __repr__(self) -> str:
        """Return string representation of Cache."""
        stats = self.get_stats()
        return (
            f"<Cache backend={self.backend_type} "
            f"hit_rate={stats['hit_rate']}% "
            f"requests={stats['total_requests']}>"
        )
