"""Utility exports."""

from .helpers import normalize_text, parse_skill_list
from .logger import get_logger

__all__ = [
    "get_logger",
    "normalize_text",
    "parse_skill_list",
]
