# src/llm/adapters/openai_adapter.py - v1
"""OpenAI chat-completions adapter. Replies are requested as a JSON object."""

from __future__ import annotations

import time
from typing import Any

from versionfusion.llm.base_client import BaseLLMClient
from versionfusion.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    def __init__(self, model: str = "gpt-4o-mini", api_key: str = "", **client_options: Any):
        self._model = model
        self._api_key = api_key
        self._client_options = client_options
        self._sdk: Any = None

    def _sdk_client(self) -> Any:
        if self._sdk is None:
            import openai

            self._sdk = openai.AsyncOpenAI(api_key=self._api_key, **self._client_options)
        return self._sdk

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        chat = [m.model_dump() for m in messages]
        if system:
            chat.insert(0, {"role": "system", "content": system})

        client = self._sdk_client()
        started = time.monotonic()
        completion = await client.chat.completions.create(
            model=self._model,
            messages=chat,
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        elapsed_ms = int((time.monotonic() - started) * 1000)

        usage = completion.usage
        return LLMResponse(
            content=completion.choices[0].message.content or "",
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            model=self._model,
            provider="openai",
            latency_ms=elapsed_ms,
            raw_response=completion,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
