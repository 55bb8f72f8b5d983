# tests/unit/analyzers/test_rule_analyzer.py - v1
"""Tests for analyzers/rule_analyzer.py."""

from __future__ import annotations

import pytest

from versionfusion.analyzers.rule_analyzer import RuleBasedAnalyzer
from versionfusion.core.models import AnalysisContext, AnalyzerId, ChangeEvidence
from versionfusion.semver.models import BumpType


async def _run(description: str = "", task_type: str | None = None, commits=None):
    evidence = ChangeEvidence(description=description, commit_messages=commits or [])
    return await RuleBasedAnalyzer().analyze(evidence, AnalysisContext(task_type=task_type))


class TestRuleBasedAnalyzer:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "description,expected,confidence,rule",
        [
            ("Remove deprecated endpoints", BumpType.MAJOR, 0.8, "breaking-keywords"),
            ("Fix login bug", BumpType.PATCH, 0.8, "fix-keywords"),
            ("Add dark mode", BumpType.MINOR, 0.8, "feature-keywords"),
            ("Refactor storage layer", BumpType.PATCH, 0.7, "refactor-keywords"),
            ("Update copyright year", BumpType.PATCH, 0.6, "default-rule"),
        ],
    )
    async def test_keyword_rules(self, description, expected, confidence, rule):
        result = await _run(description)
        assert result.source is AnalyzerId.RULE_BASED
        assert result.recommended_type is expected
        assert result.confidence == pytest.approx(confidence)
        assert result.factors == frozenset({"rule-based", rule})

    @pytest.mark.asyncio
    async def test_task_type_mapping(self):
        result = await _run("Improve login flow", task_type="Feature")
        assert result.recommended_type is BumpType.MINOR
        assert "task-type:feature" in result.factors

    @pytest.mark.asyncio
    async def test_task_type_alone(self):
        result = await _run(task_type="bug")
        assert result.recommended_type is BumpType.PATCH
        assert "task-type:bug" in result.factors

    @pytest.mark.asyncio
    async def test_breaking_beats_task_type(self):
        result = await _run("Breaking change in the config format", task_type="bug")
        assert result.recommended_type is BumpType.MAJOR

    @pytest.mark.asyncio
    async def test_task_type_beats_fix_keywords(self):
        result = await _run("Fix and extend exports", task_type="feature")
        assert result.recommended_type is BumpType.MINOR

    @pytest.mark.asyncio
    async def test_unknown_task_type_ignored(self):
        result = await _run("Add an option", task_type="spike")
        assert "feature-keywords" in result.factors

    @pytest.mark.asyncio
    async def test_falls_back_to_commit_messages(self):
        result = await _run(commits=["feat: add export"])
        assert result.recommended_type is BumpType.MINOR

    @pytest.mark.asyncio
    async def test_no_text_and_no_task_type(self):
        result = await _run("   ")
        assert result.factors == frozenset({"no-change-description"})
        assert result.confidence == pytest.approx(0.1)
