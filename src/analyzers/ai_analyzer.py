# src/analyzers/ai_analyzer.py - v1
"""AI-style analyzer delegating to an injected reasoning transport."""

from __future__ import annotations

import logging
from typing import Any

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.core.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerId,
    ChangeEvidence,
)
from versionfusion.reasoning.base_transport import BaseReasoningTransport

logger = logging.getLogger(__name__)


def build_project_context(evidence: ChangeEvidence, context: AnalysisContext) -> dict[str, Any]:
    """Summarise the evidence for the prompt; file contents are not sent."""
    project_context: dict[str, Any] = {
        "project_id": context.project_id,
        "task_type": context.task_type,
        "commit_messages": evidence.commit_messages[:20],
        "changed_files": [f.path for f in evidence.changed_files][:50],
    }
    if evidence.dependency_changes is not None:
        project_context["dependency_changes"] = [
            f"{c.name}: {c.change_type}" for c in evidence.dependency_changes.changes
        ][:50]
    if context.metadata:
        project_context["metadata"] = context.metadata
    return project_context


class AIAnalyzer(BaseAnalyzer):
    """Recommends a bump by asking a reasoning transport."""

    def __init__(self, transport: BaseReasoningTransport | None = None) -> None:
        self._transport = transport

    @property
    def source(self) -> AnalyzerId:
        return AnalyzerId.AI

    @property
    def fallback_factor(self) -> str:
        return "ai-fallback"

    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> AnalysisResult:
        if self._transport is None:
            logger.debug("No reasoning transport configured, using fallback")
            return self.fallback_result()

        recommendation = await self._transport.recommend(
            evidence.change_text(), build_project_context(evidence, context)
        )
        return AnalysisResult(
            recommended_type=recommendation.recommended_type,
            confidence=min(max(recommendation.confidence, 0.0), 1.0),
            reasoning=recommendation.reasoning,
            factors=frozenset(recommendation.factors) | {"ai-analysis"},
            source=self.source,
        )

    def health(self) -> dict[str, object]:
        return {
            "source": self.source.value,
            "status": "healthy" if self._transport is not None else "no-transport",
            "transport": self._transport.name if self._transport is not None else None,
        }
