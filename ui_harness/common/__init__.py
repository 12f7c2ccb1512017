"""
================================================================================
UI Harness Common Utilities
================================================================================

Logging bootstrap and small filesystem helpers shared by the harness.

Usage:
    from ui_harness.common import init_logger

    init_logger(config=ConfigProvider())

================================================================================
"""

import os
import re
import sys
from typing import Any, Optional

from loguru import logger


LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <7}</level> "
    "<cyan>{name}:{line}</cyan> - "
    "<level>{message}</level>"
)

_configured = False


def init_logger(
    level: str = None,
    format_string: str = None,
    log_file: str = None,
    config: Optional[Any] = None,
) -> None:
    """
    Replace loguru's default sink with the harness sinks. Runs once per process.

    Args:
        level: Minimum level; falls back to logging.level, then INFO
        format_string: Sink format; falls back to logging.format, then LOG_FORMAT
        log_file: Extra file sink; falls back to logging.file
        config: ConfigProvider to read logging.* keys from
    """
    global _configured
    if _configured:
        return

    settings = config.get if config is not None else (lambda key, default=None: default)

    level = str(level or settings("logging.level", "INFO")).upper()
    fmt = format_string or settings("logging.format", LOG_FORMAT)
    log_file = log_file or settings("logging.file")

    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt, colorize=True)

    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            level=level,
            format=fmt,
            rotation=settings("logging.rotation", "10 MB"),
            retention=settings("logging.retention", "7 days"),
            enqueue=True,
        )

    _configured = True
    logger.debug(f"Harness logging at {level}" + (f", file sink {log_file}" if log_file else ""))


def reset_logger() -> None:
    """Drop every sink and allow init_logger() to run again."""
    global _configured
    logger.remove()
    _configured = False


def ensure_directory(path: str) -> str:
    """Create path (and parents) if missing; returns path."""
    os.makedirs(path, exist_ok=True)
    return path


def safe_filename(name: str) -> str:
    """Replace every non-alphanumeric character with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


__all__ = [
    "init_logger",
    "reset_logger",
    "ensure_directory",
    "safe_filename",
]
