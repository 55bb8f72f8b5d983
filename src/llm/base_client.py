# src/llm/base_client.py - v1
"""Abstract LLM client interface used by the reasoning transport."""

from __future__ import annotations

from abc import ABC, abstractmethod

from versionfusion.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for chat-completion providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (anthropic, openai)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model the client sends requests to."""
