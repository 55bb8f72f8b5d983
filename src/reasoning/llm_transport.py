# src/reasoning/llm_transport.py - v1
"""Reasoning transport backed by a chat-completion LLM client."""

from __future__ import annotations

import logging
from typing import Any

from versionfusion.llm.base_client import BaseLLMClient
from versionfusion.llm.models import Message
from versionfusion.llm.retry import RetryConfig, ReasoningRetryExhausted, with_retry
from versionfusion.reasoning.base_transport import BaseReasoningTransport
from versionfusion.reasoning.models import ReasoningRecommendation, ReasoningTransportError
from versionfusion.reasoning.prompts import SYSTEM_PROMPT, build_user_prompt
from versionfusion.reasoning.response_parser import parse_recommendation

logger = logging.getLogger(__name__)


class LLMReasoningTransport(BaseReasoningTransport):
    """Sends the version prompt to an LLM and parses the JSON reply."""

    def __init__(
        self,
        client: BaseLLMClient,
        max_tokens: int = 1024,
        temperature: float = 0.1,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._client = client
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._retry_configs = retry_configs

    @property
    def name(self) -> str:
        return f"llm:{self._client.provider_name}"

    async def recommend(
        self, description: str, project_context: dict[str, Any]
    ) -> ReasoningRecommendation:
        messages = [Message(role="user", content=build_user_prompt(description, project_context))]
        try:
            return await with_retry(
                self._complete_and_parse,
                messages,
                caller=self.name,
                retry_configs=self._retry_configs,
            )
        except ReasoningRetryExhausted as e:
            raise ReasoningTransportError(str(e)) from e

    async def _complete_and_parse(self, messages: list[Message]) -> ReasoningRecommendation:
        response = await self._client.complete(
            messages,
            system=SYSTEM_PROMPT,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        logger.debug(
            "Reasoning reply: %d chars, %d output tokens",
            len(response.content), response.output_tokens,
        )
        return parse_recommendation(response.content, model=response.model)
