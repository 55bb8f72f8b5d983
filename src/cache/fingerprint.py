# src/cache/fingerprint.py - v1
"""Cache key computation for fused results.

The key is SHA-256 over canonical JSON of the normalised evidence, the
analysis context and the weight fingerprint, so two requests differing
only in whitespace or description case share one entry while a weight
change makes every older entry unreachable.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any

from versionfusion.core.models import AnalysisContext, ChangeEvidence, WeightConfig


def compute_cache_key(
    evidence: ChangeEvidence,
    context: AnalysisContext,
    weights: WeightConfig,
) -> str:
    """Compute the hex cache key for one fusion request."""
    payload = {
        "evidence": normalize_evidence(evidence),
        "context": _normalize_context(context),
        "weights": weights.fingerprint(),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def normalize_evidence(evidence: ChangeEvidence) -> dict[str, Any]:
    """Reduce evidence to an order- and whitespace-insensitive structure."""
    files = sorted(evidence.changed_files, key=lambda f: f.path)
    deps = evidence.dependency_changes
    return {
        "description": _normalize_text(evidence.description),
        "commits": [m.strip() for m in evidence.commit_messages if m.strip()],
        "files": [
            {
                "path": f.path,
                "content": _content_hash(f.content),
                "diff": _content_hash(f.diff),
            }
            for f in files
        ],
        "dependencies": deps.model_dump(mode="json") if deps is not None else None,
        "manifests": [
            {
                "path": d.path,
                "before": _content_hash(d.before),
                "after": _content_hash(d.after),
            }
            for d in sorted(evidence.manifest_deltas, key=lambda d: d.path)
        ],
    }


def _normalize_context(context: AnalysisContext) -> dict[str, Any]:
    return {
        "project_id": context.project_id,
        "project_path": str(context.project_path) if context.project_path else None,
        "task_type": (context.task_type or "").strip().lower() or None,
        "metadata": context.metadata,
    }


def _normalize_text(text: str) -> str:
    """Lowercase and collapse whitespace."""
    return re.sub(r"\s+", " ", text.lower()).strip()


def _content_hash(text: str | None) -> str | None:
    if text is None:
        return None
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
