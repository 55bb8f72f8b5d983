# src/llm/adapters/anthropic_adapter.py - v1
"""Anthropic Messages API adapter.

The anthropic SDK is an optional extra; it is imported when the first
request is made.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from versionfusion.llm.base_client import BaseLLMClient
from versionfusion.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseLLMClient):
    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self._sdk: Any = None

    def _sdk_client(self) -> Any:
        if self._sdk is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install versionfusion[anthropic]"
                ) from e
            options: dict[str, Any] = {"api_key": self._api_key or ""}
            if self._timeout_s is not None:
                options["timeout"] = self._timeout_s
            self._sdk = anthropic.AsyncAnthropic(**options)
        return self._sdk

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        request: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [m.model_dump() for m in messages],
        }
        if system:
            request["system"] = system

        client = self._sdk_client()
        started = time.monotonic()
        reply = await client.messages.create(**request)
        return self._to_response(reply, int((time.monotonic() - started) * 1000))

    @staticmethod
    def _to_response(reply: Any, latency_ms: int) -> LLMResponse:
        # Only text blocks carry the answer; tool_use and thinking blocks are dropped.
        text = "".join(b.text for b in reply.content if getattr(b, "type", None) == "text")
        logger.debug("Anthropic reply from %s in %d ms", reply.model, latency_ms)
        return LLMResponse(
            content=text,
            input_tokens=reply.usage.input_tokens,
            output_tokens=reply.usage.output_tokens,
            model=reply.model,
            provider="anthropic",
            latency_ms=latency_ms,
            raw_response=reply,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model
