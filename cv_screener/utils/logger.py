"""Logging configuration for the CV screener."""

import logging
import sys
from typing import Optional

from cv_screener.config import LOG_LEVEL


def resolve_level(name: str) -> int:
    """Map a level name (e.g. "debug") to its logging constant; unknown names give INFO."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance; default level comes from LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.setLevel(level if level is not None else resolve_level(LOG_LEVEL))
    return logger
