# src/orchestrator/collaborators.py - v1
"""Interfaces of the external collaborators the orchestrator delegates to.

Implementations own all side effects (manifest writes, git, history
persistence); the orchestrator only sequences the calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from versionfusion.orchestrator.models import VersionHistoryRecord
from versionfusion.semver.models import Version


class BaseVersionStore(ABC):
    """Reads and persists a project's version."""

    @abstractmethod
    async def read_current_version(self, project_id: str) -> Version:
        """Current version of the project (e.g. from its manifest)."""

    @abstractmethod
    async def write_version(self, project_id: str, version: Version) -> bool:
        """Persist a new version. Returns False when nothing was written."""

    @abstractmethod
    async def record_version_history(self, record: VersionHistoryRecord) -> None:
        """Append a release to the project's version history."""


class BaseReleaseEffects(ABC):
    """Version control side effects of a release."""

    @abstractmethod
    async def commit_and_tag(
        self,
        project_id: str,
        version: Version,
        commit_message: str,
        tag_name: str,
    ) -> bool:
        """Commit the version change and create the tag. Returns success."""
