"""
Logging configuration helpers.
Every module logs through the standard library under a short concern name
("content", "media", "api") so operators can filter by area.
"""

from __future__ import annotations

import logging

from src.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_LOGGERS = ("urllib3", "multipart", "python_multipart")

_LOGGING_CONFIGURED = False


def resolve_level(level_name: str | None) -> int:
    """Map a level name such as `debug` onto a logging constant, defaulting to INFO."""

    if not level_name:
        return logging.INFO
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str | None = None) -> None:
    """Configure process-wide logging from `LOG_LEVEL` unless a level is given."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    if level_name is None:
        level_name = get_settings().LOG_LEVEL

    logging.basicConfig(level=resolve_level(level_name), format=LOG_FORMAT)
    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _LOGGING_CONFIGURED = True
