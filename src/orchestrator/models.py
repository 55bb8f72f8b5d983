# src/orchestrator/models.py - v1
"""Orchestrator output models: VersionDecision, VersionHistoryRecord, ReleaseOutcome."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from versionfusion.core.models import FusionResult, utcnow
from versionfusion.semver.models import BumpType, Version


class VersionDecision(BaseModel):
    """Next version computed from a fused recommendation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    current_version: Version
    new_version: Version
    bump_type: BumpType
    fusion_result: FusionResult
    dry_run: bool = False

    @property
    def should_apply_effects(self) -> bool:
        return not self.dry_run


class VersionHistoryRecord(BaseModel):
    """One entry handed to the version store after a release."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str
    from_version: Version
    to_version: Version
    bump_type: BumpType
    confidence: float
    reasoning: str
    winning_source: str
    factors: list[str] = Field(default_factory=list)
    tag_name: str | None = None
    released_at: datetime = Field(default_factory=utcnow)


class ReleaseOutcome(BaseModel):
    """Result of a release hand-off, including partial failures."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str
    decision: VersionDecision
    success: bool
    version_written: bool = False
    committed_and_tagged: bool = False
    history_recorded: bool = False
    commit_message: str | None = None
    tag_name: str | None = None
    errors: list[str] = Field(default_factory=list)
