"""
Process-wide logging setup for the policy cost service.
The serverless handler, the API app, and the CLI job all call `configure_logging` before doing work.
Records go to stderr so the job's stdout carries only the response body.
"""

from __future__ import annotations

import logging
from typing import Final

from src.common.settings import get_settings

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Connection pool chatter from the HTTP client drowns out request logs below DEBUG.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("urllib3",)

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; `level` overrides `LOG_LEVEL` from settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_name = (level or get_settings().LOG_LEVEL).upper()
    resolved = logging.getLevelName(level_name)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    if resolved > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    _LOGGING_CONFIGURED = True
