# src/logging/handlers.py - v1
"""Handler factories used by setup_logging()."""

from __future__ import annotations

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_MULTIPLIERS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse a size like '10MB', '512KB' or '4096' into bytes.

    Raises:
        ValueError: On an unrecognised size string.
    """
    match = _SIZE_RE.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    return int(match.group(1)) * _MULTIPLIERS[unit]


def create_console_handler(formatter: logging.Formatter) -> logging.Handler:
    # stderr keeps stdout clean for the CLI's JSON output.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def create_rotating_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Create a size-rotated file handler.

    Args:
        log_file: Path to log file; parent directories are created.
        formatter: Formatter shared with the console handler.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated backup files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=max(retention, 0),
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler
