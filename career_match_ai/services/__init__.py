"""Service exports."""

from .career_search import (
    filter_by_industry,
    filter_by_query,
    filter_by_skills,
    paginate_careers,
    search_careers,
    search_results_page,
    semantic_search_careers,
)
from .catalog_seed import SEED_CAREERS, seed_career_records, seed_careers

__all__ = [
    "filter_by_query",
    "filter_by_industry",
    "filter_by_skills",
    "search_careers",
    "search_results_page",
    "paginate_careers",
    "semantic_search_careers",
    "SEED_CAREERS",
    "seed_career_records",
    "seed_careers",
]
