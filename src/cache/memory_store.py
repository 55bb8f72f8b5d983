# src/cache/memory_store.py - v1
"""In-process cache store (CACHE_BACKEND=memory).

TTL + LRU over an OrderedDict guarded by a threading.Lock, so the store
is safe to share across concurrent fusions, threads and event loops.
No timers: expired entries are dropped on read and by an opportunistic
sweep once the store grows beyond sweep_threshold.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.cache.models import CacheEntry

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Bounded in-memory cache with time-to-live expiry."""

    def __init__(
        self,
        ttl_s: float = 300.0,
        sweep_threshold: int = 50,
        max_entries: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be > 0")
        self._ttl_s = ttl_s
        self._sweep_threshold = sweep_threshold
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def ttl_s(self) -> float:
        return self._ttl_s

    async def get(self, key: str) -> CacheEntry | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now, self._ttl_s):
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key[:12])
                return None
            self._entries.move_to_end(key)
            return entry

    async def put(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            if len(self._entries) > self._sweep_threshold:
                self._sweep_locked(self._clock())
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache entry evicted (LRU): %s", evicted[:12])

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    async def size(self) -> int:
        with self._lock:
            return len(self._entries)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _sweep_locked(self, now: float) -> int:
        expired = [
            k for k, e in self._entries.items() if e.is_expired(now, self._ttl_s)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed %d expired entries", len(expired))
        return len(expired)
