# tests/unit/analyzers/test_base_analyzer.py - v1
"""Tests for analyzers/base_analyzer.py: error absorption and context handling."""

from __future__ import annotations

import logging

import pytest

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.core.models import AnalyzerId, ChangeEvidence
from versionfusion.logging.context import get_context
from versionfusion.semver.models import BumpType


class TestBaseAnalyzer:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseAnalyzer()  # type: ignore[abstract]

    @pytest.mark.asyncio
    async def test_exception_becomes_fallback(self, exploding_analyzer, context, caplog):
        with caplog.at_level(logging.WARNING):
            result = await exploding_analyzer.analyze(ChangeEvidence(), context)
        assert result.source is AnalyzerId.CODE
        assert result.recommended_type is BumpType.PATCH
        assert result.confidence == pytest.approx(0.1)
        assert result.factors == frozenset({"exploding-fallback"})
        assert "RuntimeError: boom" in result.reasoning
        assert "Analyzer 'code' failed" in caplog.text

    @pytest.mark.asyncio
    async def test_analyzer_context_cleared(self, stub_analyzer_cls, context):
        analyzer = stub_analyzer_cls(AnalyzerId.COMMIT)
        await analyzer.analyze(ChangeEvidence(), context)
        assert get_context().analyzer is None

    def test_missing_input_result(self, stub_analyzer_cls):
        result = stub_analyzer_cls(AnalyzerId.DEPENDENCY).missing_input_result("manifest-deltas")
        assert result.factors == frozenset({"no-manifest-deltas"})
        assert result.reasoning == "No manifest deltas available"

    def test_health(self, stub_analyzer_cls):
        assert stub_analyzer_cls(AnalyzerId.COMMIT).health() == {
            "source": "commit",
            "status": "healthy",
        }
