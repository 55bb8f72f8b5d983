# src/reasoning/response_parser.py - v1
"""Extract a ReasoningRecommendation from free-form model output.

Strategies, in order: a ```json fenced block, an object starting with
"recommendedType", then the outermost {...} span.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from versionfusion.reasoning.models import ReasoningRecommendation, ResponseParseError
from versionfusion.semver.models import BumpType

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*(\{[\s\S]*?\})\s*```")
_RECOMMENDATION_OBJECT = re.compile(r"\{\s*\"recommendedType\"[\s\S]*?\}")
_ANY_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> dict[str, Any]:
    """Find and decode the first JSON object per the strategy order.

    Raises:
        ResponseParseError: If no strategy yields a JSON object.
    """
    if not isinstance(text, str):
        raise ResponseParseError(f"Cannot parse non-string response: {type(text).__name__}")

    for strategy, pattern in (
        ("fenced", _FENCED_JSON),
        ("recommendation", _RECOMMENDATION_OBJECT),
        ("any", _ANY_OBJECT),
    ):
        match = pattern.search(text)
        if not match:
            continue
        candidate = match.group(1) if pattern is _FENCED_JSON else match.group(0)
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.debug("JSON strategy '%s' failed to parse: %s", strategy, e)
            continue
        if isinstance(data, dict):
            logger.debug("JSON extracted via '%s' strategy", strategy)
            return data

    raise ResponseParseError("Failed to parse reasoning response: no valid JSON object found")


def parse_recommendation(text: str, model: str | None = None) -> ReasoningRecommendation:
    """Validate the extracted object into a ReasoningRecommendation.

    An invalid recommendedType is an error; an out-of-range or non-numeric
    confidence becomes 0.5; missing reasoning/factors get defaults.

    Raises:
        ResponseParseError: On missing JSON or an invalid recommendedType.
    """
    data = extract_json_object(text)

    raw_type = data.get("recommendedType", data.get("recommended_type"))
    if not isinstance(raw_type, str) or raw_type.strip().lower() not in ("major", "minor", "patch"):
        raise ResponseParseError(
            f"Failed to parse reasoning response: invalid recommendedType {raw_type!r}"
        )

    confidence = data.get("confidence")
    if (
        isinstance(confidence, bool)
        or not isinstance(confidence, (int, float))
        or not 0.0 <= confidence <= 1.0
    ):
        confidence = 0.5

    reasoning = data.get("reasoning") or "AI analysis completed"
    factors = data.get("factors") or ["AI analysis"]
    if isinstance(factors, str):
        factors = [factors]

    return ReasoningRecommendation(
        recommended_type=BumpType(raw_type.strip().lower()),
        confidence=float(confidence),
        reasoning=str(reasoning),
        factors=[str(f) for f in factors],
        model=model,
    )
