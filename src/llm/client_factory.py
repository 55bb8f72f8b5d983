# src/llm/client_factory.py - v1
"""Factory: resolve a provider name to a BaseLLMClient adapter.

Adapters are referenced by dotted path and imported on demand, so a
provider's SDK is only needed when that provider is actually selected.
"""

from __future__ import annotations

import importlib
import logging

from versionfusion.config.settings import Settings
from versionfusion.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: dict[str, str] = {
    "anthropic": "versionfusion.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "openai": "versionfusion.llm.adapters.openai_adapter.OpenAIAdapter",
}

# Settings field holding each built-in provider's API key.
PROVIDER_API_KEY_FIELDS: dict[str, str] = {
    "anthropic": "anthropic_api_key",
    "openai": "openai_api_key",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Build the adapter registered for `provider`.

    The API key is taken from `settings` unless passed explicitly in
    kwargs. Custom providers registered without a key field get only
    `model` and the extra kwargs.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    try:
        class_path = _PROVIDER_REGISTRY[provider]
    except KeyError:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        ) from None

    init_kwargs: dict[str, object] = {**kwargs, "model": model}
    key_field = PROVIDER_API_KEY_FIELDS.get(provider)
    if settings is not None and key_field is not None:
        init_kwargs.setdefault("api_key", getattr(settings, key_field))

    module_path, _, class_name = class_path.rpartition(".")
    adapter_cls = getattr(importlib.import_module(module_path), class_name)
    logger.debug("LLM client %s for model %s", class_name, model)
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register (or replace) an adapter by dotted class path."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider %s: %s", name, class_path)
