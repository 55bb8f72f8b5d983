# src/cache/base_cache_store.py - v1
"""Abstract cache store interface for fused results."""

from __future__ import annotations

from abc import ABC, abstractmethod

from versionfusion.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for fusion result cache backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for key, or None when absent or expired."""

    @abstractmethod
    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store an entry, replacing any previous one for key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an entry (no-op when absent)."""

    @abstractmethod
    async def sweep(self) -> int:
        """Drop every expired entry. Returns the number removed."""

    @abstractmethod
    async def size(self) -> int:
        """Number of entries currently held."""

    async def clear(self) -> None:
        """Remove all entries. Backends override when they can do better."""
        raise NotImplementedError(f"{type(self).__name__} does not support clear()")
