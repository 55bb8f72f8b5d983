# src/reasoning/base_transport.py - v1
"""Abstract reasoning transport interface used by the AI analyzer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from versionfusion.reasoning.models import ReasoningRecommendation


class BaseReasoningTransport(ABC):
    """Anything that can turn a change description into a bump recommendation."""

    @abstractmethod
    async def recommend(
        self, description: str, project_context: dict[str, Any]
    ) -> ReasoningRecommendation:
        """Recommend a bump for the described change.

        Raises:
            ReasoningTransportError: On any transport or parsing failure.
        """

    @property
    def name(self) -> str:
        return type(self).__name__
