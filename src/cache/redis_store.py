# src/cache/redis_store.py - v1
"""Fused results shared through Redis (CACHE_BACKEND=redis).

Install with the `redis` extra. Entries are stored as JSON under a
versionfusion: prefix and expire server-side (SET ... EX ttl).
"""

from __future__ import annotations

import logging
import math

from pydantic import ValidationError

from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "versionfusion:fusion:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for multi-process deployments."""

    def __init__(self, redis_url: str, ttl_s: float = 300.0) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install versionfusion[redis]"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl_s = ttl_s

    async def get(self, key: str) -> CacheEntry | None:
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CacheEntry.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key[:12], e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        self._client.set(
            f"{_KEY_PREFIX}{key}",
            entry.model_dump_json(),
            ex=max(1, math.ceil(self._ttl_s)),
        )

    async def delete(self, key: str) -> None:
        self._client.delete(f"{_KEY_PREFIX}{key}")

    async def sweep(self) -> int:
        # Redis expires keys itself.
        return 0

    async def size(self) -> int:
        return sum(1 for _ in self._client.scan_iter(match=f"{_KEY_PREFIX}*"))

    async def clear(self) -> None:
        keys = list(self._client.scan_iter(match=f"{_KEY_PREFIX}*"))
        if keys:
            self._client.delete(*keys)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
