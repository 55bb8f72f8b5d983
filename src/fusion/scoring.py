# src/fusion/scoring.py - v1
"""Weighted scoring and winner selection over analyzer results.

score = ordinal(type) * weight(source) * confidence, which biases fusion
towards larger bumps.
"""

from __future__ import annotations

from versionfusion.core.models import (
    ANALYZER_PRIORITY,
    AnalysisResult,
    AnalyzerId,
    FusionResult,
    WeightConfig,
)


def score_result(result: AnalysisResult, weight: float) -> float:
    return result.recommended_type.ordinal * weight * result.confidence


def compute_scores(
    results: dict[AnalyzerId, AnalysisResult], weights: WeightConfig
) -> dict[AnalyzerId, float]:
    return {
        source: score_result(result, weights.weight_for(source))
        for source, result in results.items()
    }


def select_winner(scores: dict[AnalyzerId, float]) -> AnalyzerId:
    """Source with the strictly highest score; ties go to the earlier priority.

    Raises:
        ValueError: If scores is empty.
    """
    if not scores:
        raise ValueError("cannot select a winner from no scores")
    winner: AnalyzerId | None = None
    for source in ANALYZER_PRIORITY:
        if source not in scores:
            continue
        if winner is None or scores[source] > scores[winner]:
            winner = source
    if winner is None:
        raise ValueError("no scored source is a registered analyzer")
    return winner


def fuse_results(
    results: dict[AnalyzerId, AnalysisResult], weights: WeightConfig
) -> FusionResult:
    """Combine analyzer results into one FusionResult.

    Raises:
        ValueError: If results is empty.
    """
    scores = compute_scores(results, weights)
    winner = select_winner(scores)
    winning = results[winner]

    factors: set[str] = {"fusion"}
    for result in results.values():
        factors.update(result.factors)

    return FusionResult(
        recommended_type=winning.recommended_type,
        confidence=min(winning.confidence * weights.weight_for(winner), 1.0),
        reasoning=(
            f"{winner.label} analysis suggests {winning.recommended_type.value} bump. "
            f"{winning.reasoning}"
        ).strip(),
        factors=frozenset(factors),
        contributing_results=dict(results),
        winning_source=winner,
        scores=scores,
    )
