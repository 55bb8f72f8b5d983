# src/analyzers/rule_analyzer.py - v1
"""Rule-based analyzer: keyword reading of the change description plus task type."""

from __future__ import annotations

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.analyzers.keywords import (
    RULE_BREAKING_PATTERN,
    RULE_FEATURE_PATTERN,
    RULE_FIX_PATTERN,
    RULE_REFACTOR_PATTERN,
    TASK_TYPE_BUMPS,
)
from versionfusion.core.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerId,
    ChangeEvidence,
)
from versionfusion.semver.models import BumpType


class RuleBasedAnalyzer(BaseAnalyzer):
    """Keyword and task-type rules, checked in a fixed order."""

    @property
    def source(self) -> AnalyzerId:
        return AnalyzerId.RULE_BASED

    @property
    def fallback_factor(self) -> str:
        return "rule-based-fallback"

    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> AnalysisResult:
        text = evidence.change_text()
        task_type = (context.task_type or "").strip().lower()
        if not text.strip() and not task_type:
            return self.missing_input_result("change-description")

        recommended, confidence, rule, reasoning = self._apply_rules(text, task_type)
        return AnalysisResult(
            recommended_type=recommended,
            confidence=confidence,
            reasoning=reasoning,
            factors=frozenset({"rule-based", rule}),
            source=self.source,
        )

    @staticmethod
    def _apply_rules(text: str, task_type: str) -> tuple[BumpType, float, str, str]:
        if RULE_BREAKING_PATTERN.search(text):
            return BumpType.MAJOR, 0.8, "breaking-keywords", "Breaking change keywords detected."
        if task_type in TASK_TYPE_BUMPS:
            bump = TASK_TYPE_BUMPS[task_type]
            return bump, 0.8, f"task-type:{task_type}", f"Task type '{task_type}' maps to {bump.value}."
        if RULE_FIX_PATTERN.search(text):
            return BumpType.PATCH, 0.8, "fix-keywords", "Bug fix keywords detected."
        if RULE_FEATURE_PATTERN.search(text):
            return BumpType.MINOR, 0.8, "feature-keywords", "Feature keywords detected."
        if RULE_REFACTOR_PATTERN.search(text):
            return BumpType.PATCH, 0.7, "refactor-keywords", "Refactoring keywords detected."
        return BumpType.PATCH, 0.6, "default-rule", "No specific keywords, defaulting to patch."
