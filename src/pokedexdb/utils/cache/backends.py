"""Cache backend implementations.

Three interchangeable stores sit behind ``CacheBackend``: a process-local
TTL dictionary, Redis, and a no-op backend used when caching is disabled.
Values are stored as JSON so every backend hands back a fresh copy.
"""

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import redis

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10_000


class CacheBackend(ABC):
    """Abstract base class for cache backends."""

    @abstractmethod
    def get(self, key: str) -> Any:  # noqa: ANN401
        """Get value from cache by key.

        Args:
            key: Cache key to retrieve

        Returns:
            Cached value or None if not found/expired
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int) -> bool:  # noqa: ANN401
        """Set value in cache with TTL.

        Args:
            key: Cache key
            value: JSON-serializable value to cache
            ttl: Time-to-live in seconds

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> bool:
        """Clear all cached data."""
        pass

    def ping(self) -> bool:
        """Report whether the backend is reachable."""
        return True


class InMemoryBackend(CacheBackend):
    """Process-local TTL store.

    Each entry records its own expiry; expired entries are evicted when read.
    Once ``max_entries`` is reached, a write first sweeps every expired entry
    and then, if the store is still full, drops the entry closest to expiry.
    The clock is injectable so tests can advance time deterministically.
    """

    def __init__(
        self, clock: Callable[[], float] = time.monotonic, max_entries: int = DEFAULT_MAX_ENTRIES
    ):
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:  # noqa: ANN401
        """Return a fresh copy of the value, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
        return json.loads(payload)

    def set(self, key: str, value: Any, ttl: int) -> bool:  # noqa: ANN401
        """Store the JSON encoding of value until ``ttl`` seconds from now."""
        payload = json.dumps(value)
        with self._lock:
            now = self._clock()
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._make_room(now)
            self._entries[key] = (now + ttl, payload)
        return True

    def _make_room(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if len(self._entries) >= self._max_entries:
            soonest = min(self._entries, key=lambda key: self._entries[key][0])
            del self._entries[soonest]
        logger.debug("Cache sweep removed %d expired entries", len(expired))

    def clear(self) -> bool:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()
        return True

    def __len__(self) -> int:
        return len(self._entries)


class NullBackend(CacheBackend):
    """Backend that stores nothing; every lookup is a miss."""

    def get(self, key: str) -> Any:  # noqa: ANN401
        """Always miss."""
        return None

    def set(self, key: str, value: Any, ttl: int) -> bool:  # noqa: ANN401
        """Accept and discard the value."""
        return True

    def clear(self) -> bool:
        """Nothing to clear."""
        return True


class RedisBackend(CacheBackend):
    """Redis backend implementation.

    Expiry is delegated to Redis via SETEX, so entries vanish server-side.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 6379,
        db: int = 0,
        timeout: float = 1.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
    ):
        """Initialize Redis backend.

        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number
            timeout: Connection timeout in seconds
            max_retries: Connection attempts before giving up
            retry_delay: Seconds between connection attempts

        Raises:
            RuntimeError: If Redis connection cannot be established
        """
        self.host = host
        self.port = port
        self.db = db

        self.pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            socket_connect_timeout=timeout,
            socket_timeout=timeout,
        )
        self.client = redis.Redis(connection_pool=self.pool)

        for attempt in range(max_retries):
            try:
                self.client.ping()
                logger.debug("Redis backend connected to %s:%s/%s", host, port, db)
                break
            except redis.ConnectionError as e:
                if attempt < max_retries - 1:
                    logger.debug("Redis connection attempt %d failed: %s", attempt + 1, e)
                    time.sleep(retry_delay)
                else:
                    raise RuntimeError(
                        f"Failed to connect to Redis at {host}:{port} "
                        f"after {max_retries} attempts"
                    ) from e

    def get(self, key: str) -> Any:  # noqa: ANN401
        """Return the decoded value, or None when Redis has no such key."""
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.error("Redis get error for key '%s': %s", key, e)
            raise
        if value is None:
            return None
        return json.loads(value)  # type: ignore[arg-type]

    def set(self, key: str, value: Any, ttl: int) -> bool:  # noqa: ANN401
        """Store the JSON encoding of value with a server-side expiry."""
        try:
            return bool(self.client.setex(key, ttl, json.dumps(value)))
        except redis.RedisError as e:
            logger.error("Redis set error for key '%s': %s", key, e)
            raise

    def clear(self) -> bool:
        """Flush the configured Redis database."""
        try:
            self.client.flushdb()
            return True
        except redis.RedisError as e:
            logger.error("Redis clear error: %s", e)
            raise

    def ping(self) -> bool:
        """Report whether Redis answers PING."""
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
