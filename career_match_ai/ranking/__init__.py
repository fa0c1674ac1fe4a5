"""Ranking: similarity, rule-based scoring, explanations, FAISS index and the matching engine."""

from career_match_ai.ranking.explanation import compute_skill_gaps, generate_match_explanation
from career_match_ai.ranking.matching_engine import MatchingEngine, clamp_match_limit, run_career_matching
from career_match_ai.ranking.similarity import cosine_similarity
from career_match_ai.ranking.vector_index import CareerVectorIndex

__all__ = [
    "MatchingEngine",
    "run_career_matching",
    "clamp_match_limit",
    "cosine_similarity",
    "compute_skill_gaps",
    "generate_match_explanation",
    "CareerVectorIndex",
]
