# src/orchestrator/version_orchestrator.py - v1
"""Version orchestrator: fused recommendation -> next version -> effect hand-off.

The orchestrator performs no side effects itself. release() sequences the
collaborators: write_version, then commit_and_tag, then
record_version_history. A failed write stops the hand-off; later failures
are reported but never undo the write.
"""

from __future__ import annotations

import logging

from versionfusion.core.models import AnalysisContext, ChangeEvidence
from versionfusion.fusion.engine import FusionEngine
from versionfusion.orchestrator.collaborators import BaseReleaseEffects, BaseVersionStore
from versionfusion.orchestrator.models import (
    ReleaseOutcome,
    VersionDecision,
    VersionHistoryRecord,
)
from versionfusion.semver.algebra import VersionLike, bump, ensure_version

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE_TEMPLATE = "chore: bump version to {version}"
DEFAULT_TAG_TEMPLATE = "v{version}"


class VersionOrchestrator:
    """Computes the next version and delegates write-side effects."""

    def __init__(
        self,
        engine: FusionEngine,
        version_store: BaseVersionStore | None = None,
        release_effects: BaseReleaseEffects | None = None,
        commit_message_template: str = DEFAULT_COMMIT_MESSAGE_TEMPLATE,
        tag_template: str = DEFAULT_TAG_TEMPLATE,
    ) -> None:
        self._engine = engine
        self._store = version_store
        self._effects = release_effects
        self._commit_message_template = commit_message_template
        self._tag_template = tag_template

    async def determine_next_version(
        self,
        current_version: VersionLike,
        evidence: ChangeEvidence,
        context: AnalysisContext | None = None,
        dry_run: bool = False,
        prerelease_tag: str | None = None,
    ) -> VersionDecision:
        """Fuse the evidence and bump current_version accordingly.

        Raises:
            ParseError: If current_version (or prerelease_tag) is malformed.
        """
        current = ensure_version(current_version)
        fused = await self._engine.fuse(evidence, context)
        new_version = bump(current, fused.recommended_type, prerelease_tag=prerelease_tag)

        logger.info(
            "Next version %s -> %s (%s, confidence %.2f%s)",
            current, new_version, fused.recommended_type.value, fused.confidence,
            ", dry run" if dry_run else "",
        )
        return VersionDecision(
            current_version=current,
            new_version=new_version,
            bump_type=fused.recommended_type,
            fusion_result=fused,
            dry_run=dry_run,
        )

    async def release(
        self,
        project_id: str,
        evidence: ChangeEvidence,
        context: AnalysisContext | None = None,
        dry_run: bool = False,
        prerelease_tag: str | None = None,
    ) -> ReleaseOutcome:
        """Determine the next version and, unless dry-run, hand it to the collaborators.

        Raises:
            ValueError: If no version store is configured.
            ParseError: If the stored current version is malformed.
        """
        if self._store is None:
            raise ValueError("release() requires a version store")

        context = context or AnalysisContext(project_id=project_id)
        current = await self._store.read_current_version(project_id)
        decision = await self.determine_next_version(
            current, evidence, context, dry_run=dry_run, prerelease_tag=prerelease_tag
        )

        commit_message = self._commit_message_template.format(version=decision.new_version)
        tag_name = self._tag_template.format(version=decision.new_version)
        outcome = ReleaseOutcome(
            project_id=project_id,
            decision=decision,
            success=True,
            commit_message=commit_message,
            tag_name=tag_name,
        )
        if not decision.should_apply_effects:
            return outcome

        try:
            outcome.version_written = await self._store.write_version(
                project_id, decision.new_version
            )
        except Exception as e:
            logger.error("Version write failed for %s: %s", project_id, e)
            outcome.errors.append(f"write_version: {e}")
        if not outcome.version_written:
            if not outcome.errors:
                outcome.errors.append("write_version: nothing was written")
            outcome.success = False
            return outcome

        if self._effects is not None:
            try:
                outcome.committed_and_tagged = await self._effects.commit_and_tag(
                    project_id, decision.new_version, commit_message, tag_name
                )
                if not outcome.committed_and_tagged:
                    outcome.errors.append("commit_and_tag: reported failure")
            except Exception as e:
                logger.warning("Commit/tag failed for %s: %s", project_id, e)
                outcome.errors.append(f"commit_and_tag: {e}")

        fused = decision.fusion_result
        record = VersionHistoryRecord(
            project_id=project_id,
            from_version=decision.current_version,
            to_version=decision.new_version,
            bump_type=decision.bump_type,
            confidence=fused.confidence,
            reasoning=fused.reasoning,
            winning_source=fused.winning_source.value,
            factors=sorted(fused.factors),
            tag_name=tag_name if outcome.committed_and_tagged else None,
        )
        try:
            await self._store.record_version_history(record)
            outcome.history_recorded = True
        except Exception as e:
            logger.warning("Recording version history failed for %s: %s", project_id, e)
            outcome.errors.append(f"record_version_history: {e}")

        logger.info(
            "Released %s %s (errors: %d)", project_id, decision.new_version, len(outcome.errors)
        )
        return outcome
