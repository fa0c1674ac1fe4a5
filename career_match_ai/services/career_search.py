"""Career catalog browsing and search: text filters, pagination and FAISS semantic search."""

from typing import Any, Dict, List, Optional, Tuple

from career_match_ai.config import MAX_BROWSE_LIMIT, SEARCH_RESULT_LIMIT
from career_match_ai.embeddings.embedding_service import EmbeddingService, career_embedding_text
from career_match_ai.errors import DimensionMismatch
from career_match_ai.ranking.vector_index import CareerVectorIndex
from career_match_ai.schemas.career import Career
from career_match_ai.utils.helpers import normalize_text
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def filter_by_query(careers: List[Career], query: str) -> List[Career]:
    """
    Careers whose title, description or industry contains query (case-insensitive).
    Does not mutate the input list. Empty query returns all careers.
    """
    term = normalize_text(query)
    if not term:
        return list(careers)
    return [
        c for c in careers
        if term in c.title.lower()
        or term in c.description.lower()
        or term in (c.industry or "").lower()
    ]


def filter_by_industry(careers: List[Career], industry: str) -> List[Career]:
    """Careers in exactly this industry (case-insensitive). Empty industry returns all."""
    wanted = normalize_text(industry)
    if not wanted:
        return list(careers)
    return [c for c in careers if (c.industry or "").lower() == wanted]


def filter_by_skills(careers: List[Career], skills: List[str]) -> List[Career]:
    """Careers with at least one skill whose name contains any requested skill."""
    wanted = [normalize_text(s) for s in skills if normalize_text(s)]
    if not wanted:
        return list(careers)
    return [
        c for c in careers
        if any(w in s.name.lower() for s in c.skills for w in wanted)
    ]


def search_careers(
    careers: List[Career],
    query: Optional[str] = None,
    industry: Optional[str] = None,
    skills: Optional[List[str]] = None,
) -> List[Career]:
    """Apply every given filter in turn. At least one criterion is required."""
    if not query and not industry and not skills:
        raise ValueError("Search query, industry, or skills required")
    results = list(careers)
    if query:
        results = filter_by_query(results, query)
    if industry:
        results = filter_by_industry(results, industry)
    if skills:
        results = filter_by_skills(results, skills)
    return results


def search_results_page(careers: List[Career], limit: int = SEARCH_RESULT_LIMIT) -> Dict[str, Any]:
    """Public search payload: first `limit` careers (without embeddings) and the total count."""
    return {
        "careers": [c.public_dict() for c in careers[:limit]],
        "total": len(careers),
    }


def paginate_careers(careers: List[Career], limit: int = 20, offset: int = 0) -> Dict[str, Any]:
    """One browse page of public careers; limit is capped at MAX_BROWSE_LIMIT."""
    limit = max(1, min(limit, MAX_BROWSE_LIMIT))
    offset = max(0, offset)
    page = careers[offset: offset + limit]
    return {
        "careers": [c.public_dict() for c in page],
        "total": len(careers),
        "limit": limit,
        "offset": offset,
    }


def semantic_search_careers(
    query: str,
    careers: List[Career],
    embedding_service: EmbeddingService,
    top_k: int = 10,
    index: Optional[CareerVectorIndex] = None,
) -> List[Tuple[Career, float]]:
    """
    Rank careers by cosine similarity to a free-text query using a FAISS index keyed
    by career id. Pass the same index across calls to reuse what it already holds:
    only careers not yet indexed are embedded (lenient batch call when no cached
    embedding) and added. Careers whose embedding dimension differs from the
    query's are left out. Results are restricted to `careers`.

    Raises AllEmbeddingProvidersFailed if the query itself cannot be embedded and
    DimensionMismatch if `index` was built for another dimension.
    """
    if not careers or not (query or "").strip():
        return []
    query_vec = embedding_service.generate_embedding(query.strip())
    dim = len(query_vec)
    if index is None:
        index = CareerVectorIndex(dim)
    elif index.dimension != dim:
        raise DimensionMismatch(f"Index dimension {index.dimension} != query dimension {dim}")

    pending = [c for c in careers if c.id and c.id not in index]
    missing = [c for c in pending if not c.has_embedding()]
    if missing:
        vectors = embedding_service.generate_batch_embeddings([career_embedding_text(c) for c in missing])
        embedded = {c.id: c.model_copy(update={"embedding": v}) for c, v in zip(missing, vectors)}
        pending = [embedded.get(c.id, c) for c in pending]
    added = index.add_careers(pending)
    logger.info("Semantic search: %s careers newly indexed, %s in index", added, len(index))

    by_id = {c.id: c for c in careers if c.id}
    hits = index.search(query_vec, top_k=top_k, career_ids=set(by_id))
    return [(by_id[career_id], score) for career_id, score in hits]
