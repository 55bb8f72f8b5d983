# src/analyzers/base_analyzer.py - v1
"""Standard interface for evidence analyzers.

Subclasses implement _analyze(); analyze() wraps it so an analyzer never
raises: any failure becomes a low-confidence patch result tagged with the
analyzer's fallback factor.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from versionfusion.core.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerId,
    ChangeEvidence,
)
from versionfusion.logging.context import set_analyzer_context
from versionfusion.semver.models import BumpType

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.1
MISSING_INPUT_CONFIDENCE = 0.1


class BaseAnalyzer(ABC):
    """Standard interface for all analyzers."""

    @property
    @abstractmethod
    def source(self) -> AnalyzerId:
        """Evidence source this analyzer reports as."""

    @property
    @abstractmethod
    def fallback_factor(self) -> str:
        """Factor attached to the result when _analyze() fails."""

    @abstractmethod
    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> AnalysisResult:
        """Produce a recommendation. May raise; analyze() absorbs errors."""

    async def analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> AnalysisResult:
        """Run the analyzer, converting any exception into a fallback result."""
        set_analyzer_context(self.source.value)
        try:
            return await self._analyze(evidence, context)
        except Exception as e:
            logger.warning(
                "Analyzer '%s' failed, using fallback: %s: %s",
                self.source.value, type(e).__name__, e,
            )
            return self.fallback_result(e)
        finally:
            set_analyzer_context(None)

    def fallback_result(self, error: Exception | None = None) -> AnalysisResult:
        reasoning = f"{self.source.label} analysis failed, using conservative patch recommendation"
        if error is not None:
            reasoning += f" ({type(error).__name__}: {error})"
        return AnalysisResult(
            recommended_type=BumpType.PATCH,
            confidence=FALLBACK_CONFIDENCE,
            reasoning=reasoning,
            factors=frozenset({self.fallback_factor}),
            source=self.source,
        )

    def missing_input_result(self, input_name: str) -> AnalysisResult:
        """Low-confidence patch result for an analyzer with nothing to read."""
        return AnalysisResult(
            recommended_type=BumpType.PATCH,
            confidence=MISSING_INPUT_CONFIDENCE,
            reasoning=f"No {input_name.replace('-', ' ')} available",
            factors=frozenset({f"no-{input_name}"}),
            source=self.source,
        )

    def health(self) -> dict[str, object]:
        return {"source": self.source.value, "status": "healthy"}
