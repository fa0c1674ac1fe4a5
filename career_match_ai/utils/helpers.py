"""Helper utilities for the Career Match AI system."""

from typing import List, Optional


def normalize_text(text: Optional[str]) -> str:
    """Strip and lowercase; None becomes ''."""
    return (text or "").strip().lower()


def parse_skill_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated skills string ('React, node.js,') into trimmed names."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]
