"""Logging for the Career Match AI system: one stdout handler per named logger."""

import logging
import sys
from typing import Optional

from career_match_ai.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    resolved = logging.getLevelName(LOG_LEVEL)
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Named logger writing to stdout; level defaults to LOG_LEVEL from the environment."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(_resolve_level(level))
    elif level is not None:
        logger.setLevel(level)
    return logger
