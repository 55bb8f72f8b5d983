# src/analyzers/dependency_analyzer.py - v1
"""Dependency-diff analyzer.

Uses the producer-supplied DependencyChangeSummary when present, otherwise
computes one from the manifest deltas. The recommended bump follows the
summary flags (breaking > major > minor > patch).
"""

from __future__ import annotations

import logging

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.analyzers.dependency_diff import diff_manifests
from versionfusion.core.models import (
    AnalysisContext,
    AnalyzerId,
    ChangeEvidence,
    DependencyAnalysisResult,
    DependencyChangeSummary,
)

logger = logging.getLogger(__name__)


def summary_confidence(summary: DependencyChangeSummary) -> float:
    confidence = 0.5
    if summary.has_breaking_changes:
        confidence += 0.3
    if summary.has_major_updates:
        confidence += 0.2
    if summary.has_minor_updates:
        confidence += 0.1
    if summary.has_patch_updates:
        confidence += 0.05
    confidence += min(0.1 * summary.manifests_analyzed, 0.2)
    confidence += min(0.05 * len(summary.changes), 0.2)
    return min(confidence, 1.0)


def summary_factors(summary: DependencyChangeSummary) -> frozenset[str]:
    factors = {"dependency-analysis"}
    flags = (
        (summary.has_breaking_changes, "breaking-change"),
        (summary.has_major_updates, "major-update"),
        (summary.has_minor_updates, "minor-update"),
        (summary.has_patch_updates, "patch-update"),
        (summary.has_new_dependencies, "new-dependency"),
        (summary.has_removed_dependencies, "removed-dependency"),
    )
    factors.update(name for flag, name in flags if flag)
    return frozenset(factors)


class DependencyChangeAnalyzer(BaseAnalyzer):
    """Recommends a bump from dependency manifest changes."""

    @property
    def source(self) -> AnalyzerId:
        return AnalyzerId.DEPENDENCY

    @property
    def fallback_factor(self) -> str:
        return "dependency-analysis-fallback"

    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> DependencyAnalysisResult:
        summary = evidence.dependency_changes
        if summary is None:
            if not evidence.manifest_deltas:
                return self.missing_input_result("dependency-changes")  # type: ignore[return-value]
            summary = diff_manifests(evidence.manifest_deltas)
            logger.debug(
                "Diffed %d manifests: %d dependency changes",
                summary.manifests_analyzed, len(summary.changes),
            )

        return DependencyAnalysisResult(
            confidence=summary_confidence(summary),
            reasoning=f"{len(summary.changes)} dependency changes found.",
            factors=summary_factors(summary),
            source=self.source,
            summary=summary,
        )
