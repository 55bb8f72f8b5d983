# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; analyzers, fusion, cache and
orchestrator all import them from core.models.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from versionfusion.semver.models import BumpType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# === SOURCES ===


class AnalyzerId(str, Enum):
    """Evidence source identifiers, declared in tie-break priority order."""

    AI = "ai"
    RULE_BASED = "rule_based"
    CODE = "code"
    COMMIT = "commit"
    DEPENDENCY = "dependency"
    # Pseudo-source of the hybrid keyword fallback; never registered.
    FALLBACK = "fallback"

    @property
    def label(self) -> str:
        """Human-readable source name used in fused reasoning."""
        return _LABELS[self.value]

    def __str__(self) -> str:
        return self.value


_LABELS = {
    "ai": "AI",
    "rule_based": "Rule-based",
    "code": "Code change",
    "commit": "Commit message",
    "dependency": "Dependency",
    "fallback": "Hybrid fallback",
}

ANALYZER_PRIORITY: tuple[AnalyzerId, ...] = (
    AnalyzerId.AI,
    AnalyzerId.RULE_BASED,
    AnalyzerId.CODE,
    AnalyzerId.COMMIT,
    AnalyzerId.DEPENDENCY,
)


# === EVIDENCE ===


class ChangedFile(BaseModel):
    """A file touched by the change, with its diff and/or full content."""

    path: str
    content: str | None = None
    diff: str | None = None


class ManifestDelta(BaseModel):
    """Before/after text of one dependency manifest."""

    path: str
    before: str | None = None
    after: str | None = None


class DependencyChange(BaseModel):
    """One dependency delta between two manifest revisions."""

    name: str
    change_type: Literal["added", "removed", "major", "minor", "patch", "breaking", "other"]
    from_version: str | None = None
    to_version: str | None = None
    manifest: str | None = None
    section: str | None = None


class DependencyChangeSummary(BaseModel):
    """Flag set describing all dependency changes of a release."""

    has_breaking_changes: bool = False
    has_major_updates: bool = False
    has_minor_updates: bool = False
    has_patch_updates: bool = False
    has_new_dependencies: bool = False
    has_removed_dependencies: bool = False
    changes: list[DependencyChange] = Field(default_factory=list)
    manifests_analyzed: int = 0

    @property
    def implied_bump(self) -> BumpType:
        """Dominance breaking > major > minor > patch, default patch."""
        if self.has_breaking_changes or self.has_major_updates:
            return BumpType.MAJOR
        if self.has_minor_updates:
            return BumpType.MINOR
        return BumpType.PATCH

    @property
    def is_empty(self) -> bool:
        return not self.changes and not any(
            (
                self.has_breaking_changes,
                self.has_major_updates,
                self.has_minor_updates,
                self.has_patch_updates,
                self.has_new_dependencies,
                self.has_removed_dependencies,
            )
        )


class ChangeEvidence(BaseModel):
    """Raw evidence for one release decision. Every part is optional."""

    commit_messages: list[str] = Field(default_factory=list)
    changed_files: list[ChangedFile] = Field(default_factory=list)
    dependency_changes: DependencyChangeSummary | None = None
    manifest_deltas: list[ManifestDelta] = Field(default_factory=list)
    description: str = ""

    def change_text(self) -> str:
        """Description, else the joined commit messages."""
        if self.description.strip():
            return self.description
        return "\n".join(m for m in self.commit_messages if m.strip())


class AnalysisContext(BaseModel):
    """Project-level context handed to every analyzer."""

    project_id: str = "default"
    project_path: Path | None = None
    task_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


# === ANALYSIS RESULTS ===


class AnalysisResult(BaseModel):
    """Recommendation produced by one analyzer."""

    model_config = ConfigDict(frozen=True)

    recommended_type: BumpType
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = ""
    factors: frozenset[str] = frozenset()
    source: AnalyzerId
    produced_at: datetime = Field(default_factory=utcnow)


class CommitBreakdown(BaseModel):
    """Classification of a single commit message."""

    model_config = ConfigDict(frozen=True)

    header: str
    commit_type: str | None = None
    scope: str | None = None
    is_conventional: bool = False
    is_breaking: bool = False
    is_feature: bool = False
    is_fix: bool = False
    bump_type: BumpType | None = None
    weight: float = 0.0


class CommitAnalysisResult(AnalysisResult):
    commits: list[CommitBreakdown] = Field(default_factory=list)


class CodeAnalysisResult(AnalysisResult):
    has_breaking_changes: bool = False
    has_api_changes: bool = False
    has_new_features: bool = False
    has_bug_fixes: bool = False
    has_deprecations: bool = False
    modified_files: list[str] = Field(default_factory=list)


class DependencyAnalysisResult(AnalysisResult):
    """Dependency recommendation; recommended_type always follows the flags."""

    summary: DependencyChangeSummary = Field(default_factory=DependencyChangeSummary)

    @model_validator(mode="before")
    @classmethod
    def _derive_recommended_type(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        summary = data.get("summary")
        if summary is None:
            summary = DependencyChangeSummary()
        elif isinstance(summary, dict):
            summary = DependencyChangeSummary.model_validate(summary)
        data["summary"] = summary
        data["recommended_type"] = summary.implied_bump
        return data


class FusionResult(BaseModel):
    """Fused decision over all analyzer results."""

    model_config = ConfigDict(frozen=True)

    recommended_type: BumpType
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str
    factors: frozenset[str] = frozenset()
    contributing_results: dict[AnalyzerId, AnalysisResult] = Field(default_factory=dict)
    winning_source: AnalyzerId
    scores: dict[AnalyzerId, float] = Field(default_factory=dict)
    produced_at: datetime = Field(default_factory=utcnow)
    from_cache: bool = False

    @property
    def is_fallback(self) -> bool:
        return self.winning_source is AnalyzerId.FALLBACK


# === WEIGHTS ===


class WeightConfig(BaseModel):
    """Per-source fusion weights. They need not sum to 1."""

    model_config = ConfigDict(frozen=True)

    ai: float = Field(default=0.4, ge=0.0)
    rule_based: float = Field(default=0.2, ge=0.0)
    code: float = Field(default=0.2, ge=0.0)
    commit: float = Field(default=0.1, ge=0.0)
    dependency: float = Field(default=0.1, ge=0.0)

    def weight_for(self, source: AnalyzerId) -> float:
        if source is AnalyzerId.FALLBACK:
            return 0.0
        return float(getattr(self, source.value))

    def fingerprint(self) -> str:
        """Stable hash of the weights, embedded in every cache key."""
        canonical = json.dumps(
            {s.value: self.weight_for(s) for s in ANALYZER_PRIORITY},
            sort_keys=True,
            separators=(",", ":"),
        )
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]
