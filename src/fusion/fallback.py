# src/fusion/fallback.py - v1
"""Hybrid keyword fallback used when fusion cannot complete in time."""

from __future__ import annotations

from versionfusion.analyzers.keywords import (
    FALLBACK_BREAKING_KEYWORDS,
    FALLBACK_FEATURE_KEYWORDS,
)
from versionfusion.core.models import AnalyzerId, ChangeEvidence, FusionResult
from versionfusion.semver.models import BumpType


def hybrid_fallback(
    evidence: ChangeEvidence,
    reason: str = "analysis did not complete",
) -> FusionResult:
    """Plain substring rules over the change text. Cannot fail."""
    text = evidence.change_text().lower()

    if any(k in text for k in FALLBACK_BREAKING_KEYWORDS):
        recommended, confidence = BumpType.MAJOR, 0.3
        detail = "Detected potential breaking changes"
    elif any(k in text for k in FALLBACK_FEATURE_KEYWORDS):
        recommended, confidence = BumpType.MINOR, 0.3
        detail = "Detected potential new features"
    else:
        recommended, confidence = BumpType.PATCH, 0.2
        detail = "No keywords matched, using patch"

    return FusionResult(
        recommended_type=recommended,
        confidence=confidence,
        reasoning=f"Fallback ({reason}): {detail}",
        factors=frozenset({"hybrid-fallback", "simple-rules"}),
        winning_source=AnalyzerId.FALLBACK,
    )
