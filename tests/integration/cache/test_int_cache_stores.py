# tests/integration/cache/test_int_cache_stores.py - v1
"""Integration tests for cache backends behind the fusion engine.

Memory store always runs; Redis tests need REDIS_URL.
Coverage targets: memory_store.py, redis_store.py, cache_factory.py, fingerprint.py
"""

from __future__ import annotations

import asyncio
import os

import pytest

from versionfusion.cache.cache_factory import create_cache_store
from versionfusion.core.models import ChangeEvidence, WeightConfig
from versionfusion.fusion.engine_factory import create_fusion_engine

requires_redis = pytest.mark.skipif(not os.environ.get("REDIS_URL"), reason="REDIS_URL not set")


class TestMemoryBackend:
    @pytest.mark.asyncio
    async def test_engine_caches_per_evidence(self, settings):
        cache = create_cache_store(settings)
        engine = create_fusion_engine(settings, transport=None, cache=cache)
        a = ChangeEvidence(commit_messages=["fix: a"])
        b = ChangeEvidence(commit_messages=["feat: b"])

        await engine.fuse(a)
        await engine.fuse(b)
        again = await engine.fuse(a)

        assert again.from_cache
        assert await cache.size() == 2

    @pytest.mark.asyncio
    async def test_concurrent_identical_requests_agree(self, settings):
        engine = create_fusion_engine(settings, transport=None)
        evidence = ChangeEvidence(description="Add CSV export")
        results = await asyncio.gather(*(engine.fuse(evidence) for _ in range(10)))
        assert len({r.recommended_type for r in results}) == 1
        assert len({r.confidence for r in results}) == 1

    @pytest.mark.asyncio
    async def test_weight_change_misses_old_entries(self, settings):
        cache = create_cache_store(settings)
        engine = create_fusion_engine(settings, transport=None, cache=cache)
        evidence = ChangeEvidence(description="Add CSV export")

        await engine.fuse(evidence)
        engine.update_weights(WeightConfig(commit=0.9))
        fused = await engine.fuse(evidence)

        assert not fused.from_cache
        assert await cache.size() == 2


@pytest.mark.redis
@requires_redis
class TestRedisBackend:
    @pytest.mark.asyncio
    async def test_round_trip_through_engine(self, settings):
        redis_settings = settings.model_copy(
            update={"cache_backend": "redis", "cache_redis_url": os.environ["REDIS_URL"]}
        )
        cache = create_cache_store(redis_settings)
        try:
            await cache.clear()
            engine = create_fusion_engine(redis_settings, transport=None, cache=cache)
            evidence = ChangeEvidence(commit_messages=["feat: add export"])

            first = await engine.fuse(evidence)
            second = await engine.fuse(evidence)

            assert second.from_cache
            assert second.recommended_type is first.recommended_type
            assert second.scores == first.scores
            assert await cache.size() == 1
        finally:
            await cache.clear()
            cache.close()
