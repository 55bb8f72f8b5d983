# tests/integration/conftest.py - v1
"""Shared fixtures for integration tests.

Everything runs in-process with the real analyzers. The only external
service is Redis, used by tests marked `redis` when REDIS_URL is set.
"""

from __future__ import annotations

import pytest

from versionfusion.config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings with AI analysis off and a small in-memory cache."""
    return Settings(
        _env_file=None,
        ai_enabled=False,
        cache_backend="memory",
        cache_ttl_s=60.0,
        fusion_deadline_s=5.0,
    )
