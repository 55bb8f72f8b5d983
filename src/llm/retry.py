# src/llm/retry.py - v1
"""Backoff policy for reasoning calls, keyed by error class.

Errors are classified from their type name and message, since the
provider SDKs do not share an exception hierarchy. Classes without a
RetryConfig fail on the first attempt.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class ReasoningRetryExhausted(Exception):
    """A reasoning call kept failing; carries the last error seen."""

    def __init__(self, caller: str, error_type: str, attempts: int, last_error: Exception):
        self.caller = caller
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{caller}: gave up after {attempts} attempt(s) on {error_type}: {last_error}"
        )


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True

    def delay_for(self, retry_index: int) -> float:
        """Sleep before retry number `retry_index` (0-based)."""
        delay = self.base_delay_s * self.backoff_factor**retry_index
        if self.jitter:
            # Uniform in [0.5, 1.5) x nominal delay.
            delay *= random.uniform(0.5, 1.5)  # noqa: S311
        return delay


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "rate_limit": RetryConfig(max_retries=3, base_delay_s=2.0),
    "timeout": RetryConfig(max_retries=2, base_delay_s=1.0, backoff_factor=1.0),
    "server_error": RetryConfig(max_retries=3, base_delay_s=2.0),
    "parse_error": RetryConfig(max_retries=1, base_delay_s=0.5, backoff_factor=1.0),
}

# (error type, type-name fragments, message fragments), first match wins.
_CLASSIFICATION_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("rate_limit", ("ratelimit",), ("429", "rate limit")),
    ("timeout", ("timeout",), ("timed out", "timeout")),
    ("server_error", ("server",), ("500", "502", "503", "504")),
    ("parse_error", ("parse",), ("parse", "json")),
)


def classify_error(error: Exception) -> str:
    """Map an exception to a key of DEFAULT_RETRY_CONFIGS, or "unknown"."""
    name = type(error).__name__.lower()
    message = str(error).lower()
    for error_type, name_parts, message_parts in _CLASSIFICATION_RULES:
        if any(p in name for p in name_parts) or any(p in message for p in message_parts):
            return error_type
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    return config.delay_for(attempt)


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    caller: str = "unknown",
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Await fn(*args, **kwargs), backing off on retryable failures.

    Args:
        fn: Coroutine function to call.
        caller: Name used in logs and in the final error.
        retry_configs: Policy per error class. None uses the defaults;
            an empty dict disables retries.

    Raises:
        ReasoningRetryExhausted: When the error class is not retryable or
            its retry budget is spent.
    """
    configs = DEFAULT_RETRY_CONFIGS if retry_configs is None else retry_configs

    for attempt in itertools.count(1):
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            error_type = classify_error(e)
            config = configs.get(error_type)
            if config is None or attempt > config.max_retries:
                raise ReasoningRetryExhausted(caller, error_type, attempt, e) from e
            delay = config.delay_for(attempt - 1)

        logger.warning(
            "%s: %s on attempt %d, next of %d retries in %.1fs",
            caller, error_type, attempt, config.max_retries, delay,
        )
        await asyncio.sleep(delay)
