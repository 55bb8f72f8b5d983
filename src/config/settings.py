# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for fusion weights, deadline, cache and AI
transport settings. Every field has a safe default so the engine runs
without any .env file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from versionfusion.core.models import WeightConfig


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Fusion weights ===
    weight_ai: float = 0.4
    weight_rule_based: float = 0.2
    weight_code: float = 0.2
    weight_commit: float = 0.1
    weight_dependency: float = 0.1

    # === Fusion ===
    fusion_deadline_s: float = 15.0

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_ttl_s: float = 300.0
    cache_sweep_threshold: int = 50
    cache_max_entries: int = 500
    cache_redis_url: str = ""

    # === AI transport ===
    ai_enabled: bool = True
    ai_provider: str = "anthropic"
    ai_model: str = "claude-sonnet-4-20250514"
    ai_temperature: float = 0.1
    ai_max_tokens: int = 1024

    # Provider API keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # === Code analysis ===
    code_source_extensions: str = (
        ".py,.js,.jsx,.ts,.tsx,.mjs,.go,.rs,.java,.kt,.cs,.rb,.php,.swift,.c,.h,.cpp,.hpp"
    )

    # === Release templates ===
    commit_message_template: str = "chore: bump version to {version}"
    tag_template: str = "v{version}"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator(
        "weight_ai",
        "weight_rule_based",
        "weight_code",
        "weight_commit",
        "weight_dependency",
    )
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if v < 0:
            raise ConfigurationError(f"fusion weights must be >= 0, got {v}")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        weights = (
            self.weight_ai,
            self.weight_rule_based,
            self.weight_code,
            self.weight_commit,
            self.weight_dependency,
        )
        if not any(w > 0 for w in weights):
            errors.append("at least one fusion weight must be > 0")

        if self.fusion_deadline_s <= 0:
            errors.append("FUSION_DEADLINE_S must be > 0")

        if self.cache_ttl_s <= 0:
            errors.append("CACHE_TTL_S must be > 0")

        if self.cache_sweep_threshold < 1 or self.cache_max_entries < 1:
            errors.append("CACHE_SWEEP_THRESHOLD and CACHE_MAX_ENTRIES must be >= 1")

        if self.cache_enabled and self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        for template, name in (
            (self.commit_message_template, "COMMIT_MESSAGE_TEMPLATE"),
            (self.tag_template, "TAG_TEMPLATE"),
        ):
            if "{version}" not in template:
                errors.append(f"{name} must contain '{{version}}'")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def code_source_extensions_list(self) -> list[str]:
        """Parse comma-separated source extensions, normalised to '.ext'."""
        result: list[str] = []
        for ext in self.code_source_extensions.split(","):
            ext = ext.strip().lower()
            if ext:
                result.append(ext if ext.startswith(".") else f".{ext}")
        return result

    def weight_config(self) -> WeightConfig:
        """Build the fusion WeightConfig from the weight_* fields."""
        from versionfusion.core.models import WeightConfig

        return WeightConfig(
            ai=self.weight_ai,
            rule_based=self.weight_rule_based,
            code=self.weight_code,
            commit=self.weight_commit,
            dependency=self.weight_dependency,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-project config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
