# src/fusion/engine_factory.py - v1
"""Factory: wire analyzers, cache and reasoning transport from Settings."""

from __future__ import annotations

import logging

from versionfusion.analyzers.ai_analyzer import AIAnalyzer
from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.analyzers.code_analyzer import CodeChangeAnalyzer
from versionfusion.analyzers.commit_analyzer import CommitMessageAnalyzer
from versionfusion.analyzers.dependency_analyzer import DependencyChangeAnalyzer
from versionfusion.analyzers.rule_analyzer import RuleBasedAnalyzer
from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.cache.cache_factory import create_cache_store
from versionfusion.config.settings import Settings
from versionfusion.fusion.engine import FusionEngine
from versionfusion.llm.client_factory import PROVIDER_API_KEY_FIELDS
from versionfusion.reasoning.base_transport import BaseReasoningTransport

logger = logging.getLogger(__name__)

_UNSET = object()


def create_reasoning_transport(settings: Settings) -> BaseReasoningTransport | None:
    """Build the LLM reasoning transport, or None when AI analysis is off.

    A missing API key disables the transport; the AI analyzer then reports
    its fallback result.
    """
    if not settings.ai_enabled:
        return None
    key_field = PROVIDER_API_KEY_FIELDS.get(settings.ai_provider)
    if key_field is not None and not getattr(settings, key_field):
        logger.info(
            "AI analysis disabled: no API key configured for provider %s",
            settings.ai_provider,
        )
        return None

    from versionfusion.llm.client_factory import create_llm_client
    from versionfusion.reasoning.llm_transport import LLMReasoningTransport

    client = create_llm_client(settings.ai_provider, settings.ai_model, settings=settings)
    return LLMReasoningTransport(
        client,
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
    )


def create_default_analyzers(
    settings: Settings, transport: BaseReasoningTransport | None = None
) -> list[BaseAnalyzer]:
    """The five analyzers in priority order."""
    return [
        AIAnalyzer(transport),
        RuleBasedAnalyzer(),
        CodeChangeAnalyzer(settings.code_source_extensions_list),
        CommitMessageAnalyzer(),
        DependencyChangeAnalyzer(),
    ]


def create_fusion_engine(
    settings: Settings | None = None,
    transport: BaseReasoningTransport | None | object = _UNSET,
    cache: BaseCacheStore | None | object = _UNSET,
) -> FusionEngine:
    """Instantiate a fully wired FusionEngine.

    Args:
        settings: Application settings. Defaults to load from .env.
        transport: Reasoning transport override; None disables AI analysis.
        cache: Cache store override; None disables caching.
    """
    settings = settings or Settings()
    if transport is _UNSET:
        transport = create_reasoning_transport(settings)
    if cache is _UNSET:
        cache = create_cache_store(settings)

    return FusionEngine(
        analyzers=create_default_analyzers(settings, transport),  # type: ignore[arg-type]
        weights=settings.weight_config(),
        cache=cache,  # type: ignore[arg-type]
        deadline_s=settings.fusion_deadline_s,
    )
