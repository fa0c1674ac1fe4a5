"""Cosine similarity between embedding vectors."""

from typing import Sequence

import numpy as np

from career_match_ai.errors import DimensionMismatch


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Normalized dot product of two equal-length vectors, in [-1, 1].
    Returns 0.0 if either vector is all zeros; raises DimensionMismatch on unequal length.
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatch(
            f"Vectors must have the same length ({len(vec_a)} != {len(vec_b)})"
        )
    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))
