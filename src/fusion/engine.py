# src/fusion/engine.py - v1
"""Fusion engine: run analyzers concurrently under a deadline and fuse their results.

Flow per fuse() call:
  1. cache lookup (key = evidence + context + weight fingerprint); hits
     come back as a copy with from_cache=True
  2. all analyzers start as tasks; wait at most deadline_s
  3. on timeout or unexpected error -> hybrid keyword fallback (not cached)
  4. otherwise weighted scoring, priority tie-break, cache store
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Any, Callable, Sequence

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.cache.fingerprint import compute_cache_key
from versionfusion.cache.models import CacheEntry
from versionfusion.core.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerId,
    ChangeEvidence,
    FusionResult,
    WeightConfig,
)
from versionfusion.fusion.fallback import hybrid_fallback
from versionfusion.fusion.scoring import fuse_results
from versionfusion.logging.context import fusion_context

logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_S = 15.0
# Grace period for cancelled analyzer tasks to unwind after a timeout.
_CANCEL_GRACE_S = 0.05


class FusionDeadlineExceeded(Exception):
    """Raised internally when analyzers miss the fusion deadline."""

    def __init__(self, deadline_s: float, unfinished: list[str]):
        self.deadline_s = deadline_s
        self.unfinished = unfinished
        super().__init__(
            f"deadline of {deadline_s:.1f}s exceeded by: {', '.join(unfinished)}"
        )


class FusionEngine:
    """Fuses the recommendations of several analyzers into one decision."""

    def __init__(
        self,
        analyzers: Sequence[BaseAnalyzer],
        weights: WeightConfig | None = None,
        cache: BaseCacheStore | None = None,
        deadline_s: float = DEFAULT_DEADLINE_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not analyzers:
            raise ValueError("FusionEngine requires at least one analyzer")
        if deadline_s <= 0:
            raise ValueError("deadline_s must be > 0")
        sources = [a.source for a in analyzers]
        if len(set(sources)) != len(sources):
            raise ValueError(f"duplicate analyzer sources: {[s.value for s in sources]}")
        if AnalyzerId.FALLBACK in sources:
            raise ValueError("'fallback' is reserved for the hybrid fallback")

        self._analyzers = list(analyzers)
        self._weights = weights or WeightConfig()
        self._cache = cache
        self._deadline_s = deadline_s
        self._clock = clock

    @property
    def weights(self) -> WeightConfig:
        return self._weights

    @property
    def deadline_s(self) -> float:
        return self._deadline_s

    @property
    def analyzers(self) -> list[BaseAnalyzer]:
        return list(self._analyzers)

    def update_weights(self, weights: WeightConfig) -> None:
        """Replace the weights used by future fusions.

        Cached results computed under the old weights become unreachable
        because the cache key embeds the weight fingerprint.
        """
        logger.info(
            "Fusion weights updated: %s -> %s",
            self._weights.model_dump(), weights.model_dump(),
        )
        self._weights = weights

    async def fuse(
        self,
        evidence: ChangeEvidence,
        context: AnalysisContext | None = None,
        weights: WeightConfig | None = None,
    ) -> FusionResult:
        """Produce a fused bump recommendation. Never raises for analyzer failures.

        A cache hit is returned as a copy flagged `from_cache=True`; every
        other field is the stored result. Log context (fusion_id, project_id)
        is scoped to this call and the caller's context is restored after it.
        """
        context = context or AnalysisContext()
        weights = weights or self._weights
        with fusion_context(uuid.uuid4().hex[:12], context.project_id):
            key = compute_cache_key(evidence, context, weights)
            cached = await self._cache_get(key)
            if cached is not None:
                logger.info(
                    "Fusion cache hit: %s (%s)",
                    cached.recommended_type.value, cached.winning_source.value,
                )
                return cached.model_copy(update={"from_cache": True})

            try:
                results = await self._run_analyzers(evidence, context)
                fused = fuse_results(results, weights)
            except FusionDeadlineExceeded as e:
                logger.warning(
                    "Fusion deadline of %.1fs exceeded, unfinished analyzers: %s",
                    e.deadline_s, ", ".join(e.unfinished),
                )
                return hybrid_fallback(evidence, reason=str(e))
            except Exception as e:
                logger.warning("Fusion failed, using hybrid fallback: %s: %s", type(e).__name__, e)
                return hybrid_fallback(evidence, reason=f"{type(e).__name__}: {e}")

            logger.info(
                "Fused %s bump from %s (confidence %.2f)",
                fused.recommended_type.value, fused.winning_source.value, fused.confidence,
                extra={"data": {s.value: round(v, 4) for s, v in fused.scores.items()}},
            )
            await self._cache_put(key, fused)
            return fused

    async def _run_analyzers(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> dict[AnalyzerId, AnalysisResult]:
        tasks: dict[asyncio.Task[AnalysisResult], AnalyzerId] = {
            asyncio.create_task(
                analyzer.analyze(evidence, context), name=f"analyzer:{analyzer.source.value}"
            ): analyzer.source
            for analyzer in self._analyzers
        }
        done, pending = await asyncio.wait(tasks, timeout=self._deadline_s)

        if pending:
            for task in pending:
                task.cancel()
            await asyncio.wait(pending, timeout=_CANCEL_GRACE_S)
            for task in done:
                # Discarded results still count as retrieved.
                if not task.cancelled():
                    task.exception()
            unfinished = sorted(tasks[t].value for t in pending)
            raise FusionDeadlineExceeded(self._deadline_s, unfinished)

        return {tasks[task]: task.result() for task in done}

    async def _cache_get(self, key: str) -> FusionResult | None:
        if self._cache is None:
            return None
        try:
            entry = await self._cache.get(key)
        except Exception as e:
            logger.warning("Cache lookup failed, continuing without cache: %s", e)
            return None
        return entry.value if entry is not None else None

    async def _cache_put(self, key: str, result: FusionResult) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.put(
                key, CacheEntry(key=key, value=result, inserted_at=self._clock())
            )
        except Exception as e:
            logger.warning("Cache store failed: %s", e)

    async def health(self) -> dict[str, Any]:
        """Cache size, weights, deadline and the registered analyzers."""
        cache_size: int | None = None
        if self._cache is not None:
            try:
                cache_size = await self._cache.size()
            except Exception as e:
                logger.warning("Cache size unavailable: %s", e)
        return {
            "status": "healthy",
            "cache_enabled": self._cache is not None,
            "cache_size": cache_size,
            "weights": self._weights.model_dump(),
            "deadline_s": self._deadline_s,
            "analyzers": [a.health() for a in self._analyzers],
        }
