"""Cache backing stores for catalog responses.

Two stores share the same async interface:

- ``MemoryCacheStore``: in-process LRU with per-key expiry, guarded by a lock so
  it is safe to share across threads and concurrent requests.
- ``RedisCacheStore``: Redis with JSON serialization and native key expiry, for
  deployments running several workers.

Values must be JSON-compatible (the caching catalog converts domain objects
before storing them).
"""

import json
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Protocol

import redis.asyncio as redis

from watchcompass.config import Settings
from watchcompass.constants import CACHE_STORE_MAX_SIZE
from watchcompass.utils.logging import get_logger

logger = get_logger(__name__)


class CacheStoreError(Exception):
    """The backing store failed to read or write an entry."""

    pass


class CacheStore(Protocol):
    """Async key/value store with per-entry time-to-live."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: timedelta) -> None: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


class MemoryCacheStore:
    """Thread-safe in-process LRU cache with TTL (O(1) operations)."""

    def __init__(
        self,
        max_size: int = CACHE_STORE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._lock = threading.Lock()
        self._max_size = max_size
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def get(self, key: str) -> Any | None:
        """Get value from cache if not expired."""
        with self._lock:
            if key in self._entries:
                value, expires_at = self._entries[key]
                if self._clock() < expires_at:
                    self._entries.move_to_end(key)
                    return value
                # Expired, remove it
                del self._entries[key]
        return None

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Set value in cache with LRU eviction. A non-positive TTL stores nothing."""
        seconds = ttl.total_seconds()
        if seconds <= 0:
            return

        expires_at = self._clock() + seconds
        with self._lock:
            if key in self._entries:
                self._entries[key] = (value, expires_at)
                self._entries.move_to_end(key)
                return
            while len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (value, expires_at)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        with self._lock:
            self._entries.clear()


class RedisCacheStore:
    """Async Redis cache client with JSON serialization."""

    def __init__(self, url: str, namespace: str = "watchcompass") -> None:
        self._url = url
        self._namespace = namespace
        self._client: redis.Redis | None = None
        self._connected = False

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def _get_client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def connect(self) -> bool:
        """Test Redis connection."""
        try:
            client = await self._get_client()
            await client.ping()
            self._connected = True
        except redis.RedisError as e:
            logger.warning(f"Redis cache unavailable: {e}")
            self._connected = False
        return self._connected

    async def ping(self) -> bool:
        """Ping Redis to check connection health."""
        client = await self._get_client()
        try:
            return bool(await client.ping())
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis ping failed: {e}") from e

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False

    async def get(self, key: str) -> Any | None:
        """Get value from cache, or None if missing, expired or disconnected."""
        if not self._connected:
            return None

        client = await self._get_client()
        try:
            data = await client.get(self._key(key))
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis get failed for {key}: {e}") from e

        if data is None:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise CacheStoreError(f"Corrupt cache entry for {key}") from e

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Set value in cache with an expiry. A non-positive TTL stores nothing."""
        expire_seconds = int(ttl.total_seconds())
        if not self._connected or expire_seconds <= 0:
            return

        client = await self._get_client()
        try:
            await client.setex(self._key(key), expire_seconds, json.dumps(value))
        except (redis.RedisError, TypeError, ValueError) as e:
            raise CacheStoreError(f"Redis set failed for {key}: {e}") from e


def create_cache_store(settings: Settings) -> MemoryCacheStore | RedisCacheStore:
    """Pick the backing store: Redis when REDIS_URL is configured, memory otherwise."""
    if settings.redis_url is not None:
        return RedisCacheStore(str(settings.redis_url))
    return MemoryCacheStore()
