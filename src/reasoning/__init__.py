from versionfusion.reasoning.base_transport import BaseReasoningTransport
from versionfusion.reasoning.models import (
    ReasoningRecommendation,
    ReasoningTransportError,
    ResponseParseError,
)

__all__ = [
    "BaseReasoningTransport",
    "ReasoningRecommendation",
    "ReasoningTransportError",
    "ResponseParseError",
]
