# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides stub analyzers with fixed or never-ending results, sample
evidence and a mock reasoning transport. No network and no real LLM.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.core.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerId,
    ChangedFile,
    ChangeEvidence,
    WeightConfig,
)
from versionfusion.logging.context import clear_context
from versionfusion.reasoning.base_transport import BaseReasoningTransport
from versionfusion.reasoning.models import ReasoningRecommendation
from versionfusion.semver.models import BumpType


class StubAnalyzer(BaseAnalyzer):
    """Analyzer returning a fixed recommendation, counting its calls."""

    def __init__(
        self,
        source: AnalyzerId,
        bump: BumpType = BumpType.PATCH,
        confidence: float = 0.5,
        factors: frozenset[str] = frozenset(),
        reasoning: str = "stub",
        delay_s: float = 0.0,
    ) -> None:
        self._source = source
        self._bump = bump
        self._confidence = confidence
        self._factors = factors
        self._reasoning = reasoning
        self._delay_s = delay_s
        self.calls = 0

    @property
    def source(self) -> AnalyzerId:
        return self._source

    @property
    def fallback_factor(self) -> str:
        return f"{self._source.value}-fallback"

    async def _analyze(self, evidence, context) -> AnalysisResult:
        self.calls += 1
        if self._delay_s:
            await asyncio.sleep(self._delay_s)
        return AnalysisResult(
            recommended_type=self._bump,
            confidence=self._confidence,
            reasoning=self._reasoning,
            factors=self._factors,
            source=self._source,
        )


class HangingAnalyzer(BaseAnalyzer):
    """Analyzer that never returns until cancelled."""

    def __init__(self, source: AnalyzerId = AnalyzerId.AI) -> None:
        self._source = source
        self.cancelled = False

    @property
    def source(self) -> AnalyzerId:
        return self._source

    @property
    def fallback_factor(self) -> str:
        return "hanging-fallback"

    async def _analyze(self, evidence, context) -> AnalysisResult:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        raise AssertionError("unreachable")


class ExplodingAnalyzer(BaseAnalyzer):
    """Analyzer whose _analyze always raises."""

    def __init__(self, source: AnalyzerId = AnalyzerId.CODE) -> None:
        self._source = source

    @property
    def source(self) -> AnalyzerId:
        return self._source

    @property
    def fallback_factor(self) -> str:
        return "exploding-fallback"

    async def _analyze(self, evidence, context) -> AnalysisResult:
        raise RuntimeError("boom")


class StaticTransport(BaseReasoningTransport):
    """Reasoning transport returning a fixed recommendation."""

    def __init__(self, recommendation: ReasoningRecommendation) -> None:
        self.recommendation = recommendation
        self.calls: list[tuple[str, dict]] = []

    async def recommend(self, description, project_context) -> ReasoningRecommendation:
        self.calls.append((description, project_context))
        return self.recommendation


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def stub_analyzer_cls() -> type[StubAnalyzer]:
    return StubAnalyzer


@pytest.fixture
def hanging_analyzer() -> HangingAnalyzer:
    return HangingAnalyzer()


@pytest.fixture
def exploding_analyzer() -> ExplodingAnalyzer:
    return ExplodingAnalyzer()


@pytest.fixture
def default_weights() -> WeightConfig:
    return WeightConfig()


@pytest.fixture
def context() -> AnalysisContext:
    return AnalysisContext(project_id="demo")


@pytest.fixture
def fix_evidence() -> ChangeEvidence:
    """A single conventional bug-fix commit."""
    return ChangeEvidence(commit_messages=["fix: null pointer on login"])


@pytest.fixture
def feature_evidence() -> ChangeEvidence:
    return ChangeEvidence(
        commit_messages=["feat(api): add export endpoint", "docs: describe export"],
        changed_files=[
            ChangedFile(
                path="src/export.py",
                diff="+def export_report(data):\n+    return data\n",
            )
        ],
        description="Add report export",
    )


@pytest.fixture
def mock_transport() -> AsyncMock:
    """AsyncMock transport recommending a minor bump."""
    transport = AsyncMock(spec=BaseReasoningTransport)
    transport.recommend.return_value = ReasoningRecommendation(
        recommended_type=BumpType.MINOR,
        confidence=0.8,
        reasoning="Adds a backward-compatible feature",
        factors=["new endpoint"],
    )
    transport.name = "mock"
    return transport


@pytest.fixture
def static_transport_cls() -> type[StaticTransport]:
    return StaticTransport
