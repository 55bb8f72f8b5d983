# tests/unit/cache/test_redis_store.py - v1
"""Tests for cache/redis_store.py with a mocked Redis client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from versionfusion.cache.models import CacheEntry
from versionfusion.core.models import AnalyzerId, FusionResult
from versionfusion.semver.models import BumpType


def _entry(key: str = "abc") -> CacheEntry:
    value = FusionResult(
        recommended_type=BumpType.MAJOR,
        confidence=0.36,
        reasoning="Commit message analysis suggests major bump.",
        factors=frozenset({"fusion", "breaking-change"}),
        winning_source=AnalyzerId.COMMIT,
        scores={AnalyzerId.COMMIT: 1.08},
    )
    return CacheEntry(key=key, value=value, inserted_at=1.0)


def _make_store(ttl_s: float = 300.0):
    from versionfusion.cache.redis_store import RedisCacheStore

    storage: dict[str, str] = {}
    client = MagicMock()
    client.get.side_effect = lambda k: storage.get(k)
    client.set.side_effect = lambda k, v, ex=None: storage.__setitem__(k, v)
    client.delete.side_effect = lambda *keys: [storage.pop(k, None) for k in keys]
    client.scan_iter.side_effect = lambda match=None: iter(
        [k for k in storage if k.startswith(match.rstrip("*"))]
    )

    with patch.object(RedisCacheStore, "__init__", lambda self, *a, **kw: None):
        store = RedisCacheStore("redis://localhost")
    store._client = client
    store._ttl_s = ttl_s
    return store, client, storage


class TestRedisCacheStore:
    def test_import_error_without_redis(self):
        import sys

        from versionfusion.cache.redis_store import RedisCacheStore

        with patch.dict(sys.modules, {"redis": None}):
            with pytest.raises(ImportError, match="redis"):
                RedisCacheStore(redis_url="redis://localhost")

    @pytest.mark.asyncio
    async def test_put_and_get(self):
        store, client, storage = _make_store(ttl_s=12.5)
        await store.put("abc", _entry())
        assert "versionfusion:fusion:abc" in storage
        assert client.set.call_args.kwargs["ex"] == 13

        entry = await store.get("abc")
        assert entry is not None
        assert entry.value.recommended_type is BumpType.MAJOR
        assert entry.value.scores == {AnalyzerId.COMMIT: 1.08}

    @pytest.mark.asyncio
    async def test_get_miss(self):
        store, _, _ = _make_store()
        assert await store.get("nope") is None

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_a_miss(self):
        store, _, storage = _make_store()
        storage["versionfusion:fusion:bad"] = '{"key": "bad"}'
        assert await store.get("bad") is None

    @pytest.mark.asyncio
    async def test_size_delete_clear(self):
        store, _, storage = _make_store()
        await store.put("a", _entry("a"))
        await store.put("b", _entry("b"))
        storage["other:key"] = "x"
        assert await store.size() == 2
        await store.delete("a")
        assert await store.size() == 1
        await store.clear()
        assert await store.size() == 0
        assert "other:key" in storage

    @pytest.mark.asyncio
    async def test_sweep_is_noop(self):
        store, _, _ = _make_store()
        assert await store.sweep() == 0
