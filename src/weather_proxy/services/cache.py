"""Cache service for weather data."""

from __future__ import annotations

import json
from typing import Any, Protocol

import redis.asyncio as aioredis
import structlog
from cachetools import TLRUCache
from prometheus_client import Counter

from weather_proxy.config import Settings
from weather_proxy.errors import CacheError

logger = structlog.get_logger()

# Metrics
cache_hits = Counter("cache_hits_total", "Total cache hits")
cache_misses = Counter("cache_misses_total", "Total cache misses")
cache_errors = Counter(
    "cache_errors_total",
    "Cache store operations that failed and were absorbed",
    ["operation"],
)


class CacheStore(Protocol):
    """Subset of the ``redis.asyncio.Redis`` interface used by the cache."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: str, ex: int | None = None) -> Any: ...

    async def delete(self, *keys: str) -> Any: ...

    async def ping(self) -> Any: ...


def _entry_expiry(_key: str, value: tuple[str, int | None], now: float) -> float:
    ttl = value[1]
    return float("inf") if ttl is None else now + ttl


class MemoryStore:
    """Per-process store with per-entry expiry, for local development and tests."""

    def __init__(self, maxsize: int = 10000) -> None:
        self._cache: TLRUCache[str, tuple[str, int | None]] = TLRUCache(
            maxsize=maxsize,
            ttu=_entry_expiry,
        )

    async def get(self, key: str) -> str | None:
        entry = self._cache.get(key)
        return None if entry is None else entry[0]

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self._cache[key] = (value, ex)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._cache.pop(key, None) is not None:
                removed += 1
        return removed

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._cache)


def create_store(settings: Settings) -> CacheStore:
    """Build the configured cache store.

    The redis client connects lazily, so an unreachable server does not
    prevent startup; failures surface per operation and are absorbed by
    ``CacheService``.
    """
    if settings.cache_backend == "memory":
        return MemoryStore(maxsize=settings.cache_max_size)

    timeout = settings.upstream_timeout_seconds
    return aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )


class CacheService:
    """Best-effort JSON cache over a shared key-value store.

    No method raises: store failures and malformed payloads are logged and
    treated as a miss or a no-op.
    """

    def __init__(self, store: CacheStore, ttl_seconds: int = 3600) -> None:
        """Initialize cache with a store and default expiry."""
        self._store = store
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        """Default entry expiry in seconds."""
        return self._ttl_seconds

    async def get(self, key: str) -> Any | None:
        """Return the decoded value stored under ``key``, or None."""
        try:
            raw = await self._store.get(key)
            value = self._decode(key, raw)
        except Exception as e:
            cache_errors.labels(operation="get").inc()
            logger.warning("Cache get failed", key=key, error=str(e))
            return None

        if value is None:
            cache_misses.inc()
            return None
        cache_hits.inc()
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Store ``value`` as JSON under ``key`` with an expiry."""
        expiry = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            await self._store.set(key, json.dumps(value), ex=expiry)
        except Exception as e:
            cache_errors.labels(operation="set").inc()
            logger.warning("Cache set failed", key=key, error=str(e))

    async def delete(self, key: str) -> None:
        """Remove ``key`` from the store."""
        try:
            await self._store.delete(key)
        except Exception as e:
            cache_errors.labels(operation="delete").inc()
            logger.warning("Cache delete failed", key=key, error=str(e))

    async def is_healthy(self) -> bool:
        """Check whether the store answers a ping."""
        try:
            return bool(await self._store.ping())
        except Exception as e:
            logger.warning("Cache ping failed", error=str(e))
            return False

    async def close(self) -> None:
        """Release the store's connections, if it holds any."""
        aclose = getattr(self._store, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as e:
            logger.warning("Cache close failed", error=str(e))

    @staticmethod
    def _decode(key: str, raw: Any) -> Any | None:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Malformed cache entry at {key}: {e}") from e
