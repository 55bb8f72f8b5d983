# tests/unit/logging/test_unit_context.py - v1
"""Tests for logging/context.py: context variables per fusion run."""

from __future__ import annotations

import asyncio

import pytest

from versionfusion.logging.context import (
    LogContext,
    clear_context,
    fusion_context,
    get_context,
    set_analyzer_context,
    set_fusion_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_empty_by_default(self):
        assert get_context() == LogContext()
        assert get_context().as_dict() == {}

    def test_fusion_context(self):
        set_fusion_context("f-1", project_id="demo")
        assert get_context().as_dict() == {"fusion_id": "f-1", "project_id": "demo"}

    def test_analyzer_context(self):
        set_fusion_context("f-1")
        set_analyzer_context("commit")
        ctx = get_context()
        assert ctx.analyzer == "commit"
        assert ctx.project_id is None

    def test_clear(self):
        set_fusion_context("f-1", "demo")
        set_analyzer_context("ai")
        clear_context()
        assert get_context().as_dict() == {}

    @pytest.mark.asyncio
    async def test_tasks_do_not_leak_analyzer(self):
        set_fusion_context("f-1")

        async def worker(name: str) -> str | None:
            set_analyzer_context(name)
            await asyncio.sleep(0)
            return get_context().analyzer

        results = await asyncio.gather(worker("ai"), worker("code"))
        assert results == ["ai", "code"]
        assert get_context().analyzer is None
        assert get_context().fusion_id == "f-1"

    def test_fusion_context_restores_outer_values(self):
        set_fusion_context("outer", "proj-a")
        with fusion_context("inner", "proj-b") as ctx:
            assert ctx.as_dict() == {"fusion_id": "inner", "project_id": "proj-b"}
        assert get_context().as_dict() == {"fusion_id": "outer", "project_id": "proj-a"}

    def test_fusion_context_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with fusion_context("inner"):
                raise RuntimeError("boom")
        assert get_context().fusion_id is None
