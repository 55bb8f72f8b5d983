# src/reasoning/models.py - v1
"""Reasoning transport types: ReasoningRecommendation and transport errors."""

from __future__ import annotations

from pydantic import BaseModel, Field

from versionfusion.semver.models import BumpType


class ReasoningTransportError(Exception):
    """Raised when a reasoning transport cannot produce a recommendation."""


class ResponseParseError(ReasoningTransportError):
    """Raised when a model reply does not contain a usable recommendation."""


class ReasoningRecommendation(BaseModel):
    """Normalised recommendation returned by a reasoning transport."""

    recommended_type: BumpType
    confidence: float = 0.5
    reasoning: str = "AI analysis completed"
    factors: list[str] = Field(default_factory=lambda: ["AI analysis"])
    model: str | None = None
