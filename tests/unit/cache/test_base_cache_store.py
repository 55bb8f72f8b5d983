# tests/unit/cache/test_base_cache_store.py - v1
"""Tests for cache/base_cache_store.py."""

from __future__ import annotations

import pytest

from versionfusion.cache.base_cache_store import BaseCacheStore


class _MinimalStore(BaseCacheStore):
    async def get(self, key):
        return None

    async def put(self, key, entry):
        return None

    async def delete(self, key):
        return None

    async def sweep(self):
        return 0

    async def size(self):
        return 0


class TestBaseCacheStore:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseCacheStore()  # type: ignore[abstract]

    @pytest.mark.asyncio
    async def test_clear_not_supported_by_default(self):
        with pytest.raises(NotImplementedError, match="_MinimalStore"):
            await _MinimalStore().clear()
