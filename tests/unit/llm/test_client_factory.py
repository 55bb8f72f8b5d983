# tests/unit/llm/test_client_factory.py - v1
"""Tests for llm/client_factory.py and the provider adapters (SDKs mocked)."""

from __future__ import annotations

import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from versionfusion.config.settings import Settings
from versionfusion.llm.adapters.anthropic_adapter import AnthropicAdapter
from versionfusion.llm.adapters.openai_adapter import OpenAIAdapter
from versionfusion.llm.client_factory import (
    UnsupportedProviderError,
    _PROVIDER_REGISTRY,
    create_llm_client,
    register_provider,
)
from versionfusion.llm.models import Message


class TestCreateLLMClient:
    def test_anthropic_with_settings_key(self):
        settings = Settings(_env_file=None, anthropic_api_key="sk-test")
        client = create_llm_client("anthropic", "claude-x", settings)
        assert isinstance(client, AnthropicAdapter)
        assert client.model_name == "claude-x"
        assert client._api_key == "sk-test"

    def test_openai(self):
        settings = Settings(_env_file=None, openai_api_key="sk-oai")
        client = create_llm_client("openai", "gpt-4o-mini", settings)
        assert isinstance(client, OpenAIAdapter)
        assert client.provider_name == "openai"

    def test_unsupported(self):
        with pytest.raises(UnsupportedProviderError, match="Available: anthropic, openai"):
            create_llm_client("mystery", "m")

    def test_register_provider(self):
        register_provider(
            "custom", "versionfusion.llm.adapters.openai_adapter.OpenAIAdapter"
        )
        try:
            client = create_llm_client("custom", "local-model")
            assert isinstance(client, OpenAIAdapter)
        finally:
            _PROVIDER_REGISTRY.pop("custom", None)


class TestAnthropicAdapter:
    @pytest.mark.asyncio
    async def test_complete_joins_text_blocks(self):
        adapter = AnthropicAdapter(model="claude-x", api_key="k")
        response = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text='{"recommendedType": '),
                SimpleNamespace(type="tool_use"),
                SimpleNamespace(type="text", text='"minor"}'),
            ],
            usage=SimpleNamespace(input_tokens=10, output_tokens=5),
            model="claude-x",
        )
        sdk_client = MagicMock()
        sdk_client.messages.create = AsyncMock(return_value=response)
        adapter._sdk = sdk_client

        result = await adapter.complete([Message(role="user", content="hi")], system="sys")

        assert result.content == '{"recommendedType": "minor"}'
        assert result.output_tokens == 5
        params = sdk_client.messages.create.call_args.kwargs
        assert params["system"] == "sys"
        assert params["messages"] == [{"role": "user", "content": "hi"}]

    def test_missing_sdk(self):
        adapter = AnthropicAdapter()
        with patch.dict(sys.modules, {"anthropic": None}):
            with pytest.raises(ImportError, match="anthropic package required"):
                adapter._sdk_client()


class TestOpenAIAdapter:
    @pytest.mark.asyncio
    async def test_complete_requests_json_object(self):
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content='{"recommendedType": "patch"}'))],
            usage=SimpleNamespace(prompt_tokens=7, completion_tokens=3),
        )
        sdk_client = MagicMock()
        sdk_client.chat.completions.create = AsyncMock(return_value=response)
        fake_openai = MagicMock()
        fake_openai.AsyncOpenAI.return_value = sdk_client

        adapter = OpenAIAdapter(model="gpt-4o-mini", api_key="k")
        with patch.dict(sys.modules, {"openai": fake_openai}):
            result = await adapter.complete([Message(role="user", content="hi")], system="sys")

        assert result.content == '{"recommendedType": "patch"}'
        assert result.input_tokens == 7
        kwargs = sdk_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
