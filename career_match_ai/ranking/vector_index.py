"""FAISS index over career embeddings, keyed by career id and reusable across searches."""

from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from career_match_ai.schemas.career import Career
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _normalize_l2(vectors: np.ndarray) -> np.ndarray:
    """L2-normalize rows so that dot product equals cosine similarity."""
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms = np.where(norms > 0, norms, 1.0)
    return vectors.astype(np.float32) / norms


class CareerVectorIndex:
    """
    FAISS IndexFlatIP over L2-normalized career embeddings (cosine similarity).
    Each career id is indexed at most once; searches can be restricted to a subset of ids.
    """

    def __init__(self, dimension: int) -> None:
        self._dimension = dimension
        self._index = None
        self._career_ids: List[str] = []
        self._positions: Dict[str, int] = {}

    @property
    def dimension(self) -> int:
        return self._dimension

    def __contains__(self, career_id: str) -> bool:
        return career_id in self._positions

    def __len__(self) -> int:
        return len(self._career_ids)

    def size(self) -> int:
        return len(self)

    def _get_faiss_index(self):
        if self._index is None:
            try:
                import faiss
            except ImportError:
                raise ImportError("faiss-cpu not installed; pip install faiss-cpu")
            self._index = faiss.IndexFlatIP(self._dimension)
            logger.info("Created FAISS IndexFlatIP dimension=%s", self._dimension)
        return self._index

    def add_embeddings(self, vectors: List[List[float]], career_ids: List[str]) -> None:
        """Add one vector per career id. Ids already indexed (or repeated) are rejected."""
        if not vectors or not career_ids or len(vectors) != len(career_ids):
            raise ValueError("vectors and career_ids must be same length and non-empty")
        if len(set(career_ids)) != len(career_ids) or any(cid in self._positions for cid in career_ids):
            raise ValueError("career ids must be unique and not already indexed")
        arr = np.array(vectors, dtype=np.float32)
        if arr.ndim != 2 or arr.shape[1] != self._dimension:
            raise ValueError(f"expected vectors of dimension {self._dimension}")
        self._get_faiss_index().add(_normalize_l2(arr))
        for career_id in career_ids:
            self._positions[career_id] = len(self._career_ids)
            self._career_ids.append(career_id)
        logger.info("Indexed %s careers; total %s", len(career_ids), len(self._career_ids))

    def add_careers(self, careers: Iterable[Career]) -> int:
        """
        Index careers that carry a usable embedding and are not indexed yet.
        Careers without an id, with another dimension, or with a zero / non-finite
        vector are left out. Returns the number of careers added.
        """
        vectors: List[List[float]] = []
        ids: List[str] = []
        skipped = 0
        for career in careers:
            if not career.id or career.id in self._positions or career.id in ids:
                continue
            vec = career.embedding or []
            if (
                len(vec) != self._dimension
                or not np.all(np.isfinite(vec))
                or not np.any(vec)
            ):
                skipped += 1
                continue
            vectors.append(vec)
            ids.append(career.id)
        if skipped:
            logger.warning("%s careers not indexed (no usable %s-dim embedding)", skipped, self._dimension)
        if ids:
            self.add_embeddings(vectors, ids)
        return len(ids)

    def search(
        self,
        query_vector: List[float],
        top_k: int = 10,
        career_ids: Optional[Set[str]] = None,
    ) -> List[Tuple[str, float]]:
        """
        (career_id, similarity) pairs, best first. With career_ids, only those
        careers are considered.
        """
        if not self._career_ids or top_k <= 0:
            return []
        q = _normalize_l2(np.array([query_vector], dtype=np.float32))
        index = self._get_faiss_index()
        k = index.ntotal if career_ids is not None else min(top_k, index.ntotal)
        scores, positions = index.search(q, k)
        out: List[Tuple[str, float]] = []
        for score, pos in zip(scores[0], positions[0]):
            if not 0 <= pos < len(self._career_ids):
                continue
            career_id = self._career_ids[pos]
            if career_ids is not None and career_id not in career_ids:
                continue
            out.append((career_id, float(score)))
            if len(out) == top_k:
                break
        return out
