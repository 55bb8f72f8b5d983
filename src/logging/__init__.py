from versionfusion.logging.context import (
    clear_context,
    fusion_context,
    get_context,
    set_analyzer_context,
    set_fusion_context,
)
from versionfusion.logging.logger import get_logger, setup_logging

__all__ = [
    "clear_context",
    "fusion_context",
    "get_context",
    "get_logger",
    "set_analyzer_context",
    "set_fusion_context",
    "setup_logging",
]
