"""
Career matching engine: embedding similarity + rule-based scoring, explained and persisted.

score = 0.4 * cosine(user, career) + 0.35 * skill_match + 0.15 * interest_match
        + 0.1 * experience_match, scaled to 0-100; only scores above the threshold are kept.
"""

from __future__ import annotations

import asyncio
import math
from typing import Any, Dict, List, Optional, Set

from career_match_ai.config import (
    CACHE_CAREER_EMBEDDINGS,
    CAREER_FETCH_LIMIT,
    DEFAULT_MATCH_LIMIT,
    EMBEDDING_TIMEOUT_SECONDS,
    ENHANCED_MATCH_LIMIT,
    MATCH_CONCURRENCY,
    MATCH_SCORE_THRESHOLD,
    MATCH_TIMEOUT_SECONDS,
    MAX_MATCH_LIMIT,
    MIN_MATCH_LIMIT,
)
from career_match_ai.embeddings.embedding_service import (
    EmbeddingService,
    career_embedding_text,
    user_profile_embedding_text,
)
from career_match_ai.errors import CareerNotFound, MatchGenerationFailed, NoCareersAvailable
from career_match_ai.ranking.explanation import generate_match_explanation
from career_match_ai.ranking.scoring import (
    calculate_experience_match,
    calculate_interest_match,
    calculate_skill_match,
    compatibility_score,
)
from career_match_ai.ranking.similarity import cosine_similarity
from career_match_ai.schemas.career import Career
from career_match_ai.schemas.career_match import CareerMatch, EnhancedMatch, MatchingResult
from career_match_ai.schemas.user_profile import UserProfile
from career_match_ai.storage.base import CatalogStore, MatchStore
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def clamp_match_limit(requested: Optional[int]) -> int:
    """Clamp a caller-supplied limit to [MIN_MATCH_LIMIT, MAX_MATCH_LIMIT]; None -> default."""
    if requested is None:
        return DEFAULT_MATCH_LIMIT
    return max(MIN_MATCH_LIMIT, min(MAX_MATCH_LIMIT, int(requested)))


class MatchingEngine:
    """Ranks the career catalog against one user profile. Collaborators are injected."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        catalog: CatalogStore,
        match_store: MatchStore,
        career_fetch_limit: int = CAREER_FETCH_LIMIT,
        concurrency: int = MATCH_CONCURRENCY,
        embedding_timeout: float = EMBEDDING_TIMEOUT_SECONDS,
        cache_embeddings: bool = CACHE_CAREER_EMBEDDINGS,
    ) -> None:
        self._embeddings = embedding_service
        self._catalog = catalog
        self._matches = match_store
        self._career_fetch_limit = career_fetch_limit
        self._concurrency = max(1, concurrency)
        self._embedding_timeout = embedding_timeout
        self._cache_embeddings = cache_embeddings
        self._background_tasks: Set[asyncio.Task] = set()

    async def _embed(self, text: str) -> List[float]:
        return await asyncio.wait_for(
            asyncio.to_thread(self._embeddings.generate_embedding, text),
            timeout=self._embedding_timeout,
        )

    async def generate_career_matches(
        self,
        user_id: str,
        profile: UserProfile,
        limit: int = DEFAULT_MATCH_LIMIT,
    ) -> List[MatchingResult]:
        """
        Score every active career against the profile and return the top `limit`
        matches, best first. The stored match set for user_id is replaced.

        Raises NoCareersAvailable if the catalog is empty and MatchGenerationFailed
        if the catalog or the profile embedding cannot be obtained.
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")

        try:
            careers = await asyncio.to_thread(self._catalog.get_active_careers, self._career_fetch_limit)
        except Exception as e:
            raise MatchGenerationFailed("Failed to load the career catalog") from e
        careers = [c for c in careers if c.is_active]
        if not careers:
            raise NoCareersAvailable("No careers available for matching")

        try:
            user_vec = await self._embed(user_profile_embedding_text(profile))
        except Exception as e:
            logger.error("User profile embedding failed for user %s: %s", user_id, e)
            raise MatchGenerationFailed("Failed to generate career matches") from e

        sem = asyncio.Semaphore(self._concurrency)

        async def task(career: Career) -> Optional[MatchingResult]:
            async with sem:
                return await self._match_career(profile, career, user_vec)

        results = await asyncio.gather(*[task(c) for c in careers])
        matches = [m for m in results if m is not None]
        matches.sort(key=lambda m: -m.compatibility_score)
        ranked = matches[:limit]

        await self._save_career_matches(user_id, ranked)
        logger.info(
            "Career matching finished: user=%s careers=%s retained=%s returned=%s",
            user_id,
            len(careers),
            len(matches),
            len(ranked),
        )
        return ranked

    async def _career_embedding(self, career: Career) -> List[float]:
        """Cached embedding if present, otherwise computed (and optionally written back)."""
        if career.has_embedding():
            return career.embedding
        vec = await self._embed(career_embedding_text(career))
        if self._cache_embeddings and career.id:
            self._schedule_write_back(career.id, vec)
        return vec

    async def _match_career(
        self,
        profile: UserProfile,
        career: Career,
        user_vec: List[float],
    ) -> Optional[MatchingResult]:
        """
        Score one career. None if it falls under the threshold or if any step fails
        (embedding, non-finite similarity, scoring); one bad career never aborts the run.
        """
        try:
            career_vec = await self._career_embedding(career)
            similarity = cosine_similarity(user_vec, career_vec)
            if not math.isfinite(similarity):
                raise ValueError(f"non-finite similarity {similarity}")

            skill_match = calculate_skill_match(profile.skills, career.skills)
            interest_match = calculate_interest_match(profile.interests, career)
            experience_match = calculate_experience_match(profile.experience, career)
            score = compatibility_score(similarity, skill_match, interest_match, experience_match)
            if score <= MATCH_SCORE_THRESHOLD:
                return None

            reasons, gaps = generate_match_explanation(profile, career, score, skill_match, interest_match)
            return MatchingResult(
                career=career,
                compatibility_score=score,
                match_reasons=reasons,
                skill_gaps=gaps,
            )
        except Exception as e:
            logger.warning("Error processing career %s (%s), skipping: %s", career.title, career.id, e)
            return None

    async def _save_career_matches(self, user_id: str, results: List[MatchingResult]) -> None:
        """Replace the user's stored matches. Failures are logged; the caller still gets results."""
        rows = [CareerMatch.from_result(user_id, r) for r in results]
        try:
            await asyncio.to_thread(self._matches.delete_matches_for_user, user_id)
            await asyncio.to_thread(self._matches.insert_matches, user_id, rows)
        except Exception as e:
            logger.exception("Error saving career matches for user %s: %s", user_id, e)

    # ------------------------------------------------------------------
    # Embedding write-back (off the scoring path)
    # ------------------------------------------------------------------

    def _schedule_write_back(self, career_id: str, embedding: List[float]) -> None:
        task = asyncio.create_task(self._write_back_embedding(career_id, embedding))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _write_back_embedding(self, career_id: str, embedding: List[float]) -> None:
        try:
            await asyncio.to_thread(self._catalog.update_career_embedding, career_id, embedding)
        except Exception as e:
            logger.warning("Could not cache embedding for career %s: %s", career_id, e)

    async def wait_for_background_tasks(self) -> None:
        """Wait for pending embedding write-backs (call before closing the event loop)."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Read side: stored matches, no rescoring
    # ------------------------------------------------------------------

    def get_enhanced_career_matches(self, user_id: str, limit: int = ENHANCED_MATCH_LIMIT) -> List[EnhancedMatch]:
        """Stored matches joined with current career data; matches whose career is gone are dropped."""
        enhanced: List[EnhancedMatch] = []
        for match in self._matches.get_matches_for_user(user_id, limit):
            career = self._catalog.get_career_by_id(match.career_id)
            if career is None:
                logger.debug("Dropping stored match %s: career %s no longer exists", match.id, match.career_id)
                continue
            enhanced.append(
                EnhancedMatch.from_career(
                    match.id,
                    career,
                    match.compatibility_score,
                    match.match_reasons,
                    match.skill_gaps,
                )
            )
        return enhanced

    def get_career_details(self, career_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Public career record plus the user's stored match score for it (or None)."""
        career = self._catalog.get_career_by_id(career_id)
        if career is None:
            raise CareerNotFound(f"Career not found: {career_id}")
        match_score = None
        if user_id:
            for match in self._matches.get_matches_for_user(user_id, MAX_MATCH_LIMIT):
                if match.career_id == career_id:
                    match_score = {
                        "compatibility_score": match.compatibility_score,
                        "match_reasons": list(match.match_reasons),
                        "skill_gaps": [g.model_dump() for g in match.skill_gaps],
                    }
                    break
        details = career.public_dict()
        details["match_score"] = match_score
        return details


def run_career_matching(
    engine: MatchingEngine,
    user_id: str,
    profile: UserProfile,
    limit: int = DEFAULT_MATCH_LIMIT,
    timeout: float = MATCH_TIMEOUT_SECONDS,
) -> List[MatchingResult]:
    """
    Run generate_career_matches under an overall timeout. Safe to call from sync context.
    A timeout is reported as MatchGenerationFailed.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        try:
            return loop.run_until_complete(
                asyncio.wait_for(engine.generate_career_matches(user_id, profile, limit), timeout)
            )
        except asyncio.TimeoutError as e:
            raise MatchGenerationFailed(f"Career matching timed out after {timeout}s") from e
        finally:
            loop.run_until_complete(engine.wait_for_background_tasks())
    finally:
        loop.close()
