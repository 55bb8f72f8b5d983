# src/logging/context.py - v1
"""Contextual logging support: attach fusion_id, project_id, analyzer to log records."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

# Context variables for structured logging, set per fusion run.
_fusion_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fusion_id", default=None
)
_project_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "project_id", default=None
)
_analyzer: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "analyzer", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    fusion_id: str | None = None
    project_id: str | None = None
    analyzer: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        fusion_id=_fusion_id.get(),
        project_id=_project_id.get(),
        analyzer=_analyzer.get(),
    )


def set_fusion_context(fusion_id: str, project_id: str | None = None) -> None:
    """Set fusion-level context (called once per fuse() call)."""
    _fusion_id.set(fusion_id)
    _project_id.set(project_id)


def set_analyzer_context(analyzer: str | None) -> None:
    """Set analyzer-level context (called inside each analyzer task)."""
    _analyzer.set(analyzer)


def clear_context() -> None:
    """Reset all context variables."""
    _fusion_id.set(None)
    _project_id.set(None)
    _analyzer.set(None)


@contextmanager
def fusion_context(fusion_id: str, project_id: str | None = None) -> Iterator[LogContext]:
    """Scope fusion-level context to a block, restoring the caller's on exit."""
    fusion_token = _fusion_id.set(fusion_id)
    project_token = _project_id.set(project_id)
    try:
        yield get_context()
    finally:
        _project_id.reset(project_token)
        _fusion_id.reset(fusion_token)
