from versionfusion.orchestrator.collaborators import BaseReleaseEffects, BaseVersionStore
from versionfusion.orchestrator.models import ReleaseOutcome, VersionDecision, VersionHistoryRecord
from versionfusion.orchestrator.version_orchestrator import VersionOrchestrator

__all__ = [
    "BaseReleaseEffects",
    "BaseVersionStore",
    "ReleaseOutcome",
    "VersionDecision",
    "VersionHistoryRecord",
    "VersionOrchestrator",
]
