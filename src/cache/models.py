# src/cache/models.py - v1
"""Cache domain model: CacheEntry."""

from __future__ import annotations

from pydantic import BaseModel

from versionfusion.core.models import FusionResult


class CacheEntry(BaseModel):
    """Memoised FusionResult keyed by evidence/context/weight fingerprint.

    inserted_at is a time.monotonic() reading for the memory store; the
    redis store leaves expiry to the server and keeps it informational.
    """

    key: str
    value: FusionResult
    inserted_at: float

    def is_expired(self, now: float, ttl_s: float) -> bool:
        return now - self.inserted_at >= ttl_s
