"""Central logging configuration utilities for unitypackage_extractor.

Logging stays on the standard library. The CLI calls `configure_logging`;
library code only asks for loggers via `get_logger`.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .constants import LOG_LEVEL_ENV

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def resolve_level(level: str | int | None) -> int:
    """Translate a level name (or number) into a logging level, defaulting to INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return _LEVEL_MAP.get(level.upper(), logging.INFO)
    return level


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger.

    Order of precedence for level:
    1. Explicit `level` argument if given
    2. Environment variable `UNITYPACKAGE_LOG_LEVEL`
    3. Fallback to `INFO`
    """
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a project logger."""
    return logging.getLogger(name or "unitypackage_extractor")


__all__ = ["configure_logging", "get_logger", "resolve_level"]
