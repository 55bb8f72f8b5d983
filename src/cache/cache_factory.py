# src/cache/cache_factory.py - v1
"""Factory for cache store instantiation."""

from __future__ import annotations

from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore | None:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the memory backend.

    Returns:
        Configured BaseCacheStore, or None when caching is disabled.
    """
    if settings is None:
        from versionfusion.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if not settings.cache_enabled:
        return None

    if settings.cache_backend == "memory":
        from versionfusion.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore(
            ttl_s=settings.cache_ttl_s,
            sweep_threshold=settings.cache_sweep_threshold,
            max_entries=settings.cache_max_entries,
        )

    if settings.cache_backend == "redis":
        from versionfusion.cache.redis_store import RedisCacheStore
        if not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(
            redis_url=settings.cache_redis_url, ttl_s=settings.cache_ttl_s
        )

    raise ValueError(f"Unsupported cache backend: {settings.cache_backend!r}")
