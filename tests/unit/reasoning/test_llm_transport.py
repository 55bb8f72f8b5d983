# tests/unit/reasoning/test_llm_transport.py - v1
"""Tests for reasoning/llm_transport.py with a mocked LLM client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from versionfusion.llm.models import LLMResponse
from versionfusion.llm.retry import RetryConfig
from versionfusion.reasoning.llm_transport import LLMReasoningTransport
from versionfusion.reasoning.models import ReasoningTransportError
from versionfusion.reasoning.prompts import SYSTEM_PROMPT
from versionfusion.semver.models import BumpType


def _client(*contents: str) -> MagicMock:
    client = MagicMock()
    client.provider_name = "anthropic"
    client.complete = AsyncMock(
        side_effect=[
            LLMResponse(content=c, model="test-model", provider="anthropic", output_tokens=12)
            for c in contents
        ]
    )
    return client


class TestLLMReasoningTransport:
    def test_name(self):
        assert LLMReasoningTransport(_client()).name == "llm:anthropic"

    @pytest.mark.asyncio
    async def test_recommend(self):
        client = _client('{"recommendedType": "minor", "confidence": 0.8, "reasoning": "new API"}')
        transport = LLMReasoningTransport(client, max_tokens=256, temperature=0.0)

        rec = await transport.recommend("Add export endpoint", {"project_id": "demo"})

        assert rec.recommended_type is BumpType.MINOR
        assert rec.model == "test-model"
        kwargs = client.complete.call_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.0
        messages = client.complete.call_args.args[0]
        assert "Add export endpoint" in messages[0].content
        assert '"project_id": "demo"' in messages[0].content

    @pytest.mark.asyncio
    async def test_unparseable_reply_raises_without_retries(self):
        transport = LLMReasoningTransport(_client("no json here"), retry_configs={})
        with pytest.raises(ReasoningTransportError, match="parse_error"):
            await transport.recommend("x", {})

    @pytest.mark.asyncio
    async def test_parse_error_retried(self):
        client = _client("garbage", '{"recommendedType": "patch"}')
        transport = LLMReasoningTransport(
            client,
            retry_configs={"parse_error": RetryConfig(max_retries=1, base_delay_s=0.0, jitter=False)},
        )
        rec = await transport.recommend("x", {})
        assert rec.recommended_type is BumpType.PATCH
        assert client.complete.await_count == 2

    @pytest.mark.asyncio
    async def test_client_error_wrapped(self):
        client = _client()
        client.complete = AsyncMock(side_effect=RuntimeError("connection refused"))
        transport = LLMReasoningTransport(client, retry_configs={})
        with pytest.raises(ReasoningTransportError, match="connection refused"):
            await transport.recommend("x", {})
