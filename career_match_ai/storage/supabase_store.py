"""Supabase-backed catalog and match store (tables: careers, career_matches)."""

from typing import List, Optional

from supabase import Client, create_client

from career_match_ai.config import SUPABASE_KEY, SUPABASE_URL
from career_match_ai.schemas.career import Career
from career_match_ai.schemas.career_match import CareerMatch
from career_match_ai.storage.base import CatalogStore, MatchStore
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

CAREERS_TABLE = "careers"
MATCHES_TABLE = "career_matches"


def get_client(url: str = SUPABASE_URL, key: str = SUPABASE_KEY) -> Client:
    """Create a Supabase client from SUPABASE_URL + SUPABASE_KEY."""
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables must be set")
    return create_client(url, key)


def _career_row(career: Career) -> dict:
    row = career.model_dump(mode="json")
    if not row.get("id"):
        row.pop("id", None)
    return row


def _match_row(user_id: str, match: CareerMatch) -> dict:
    row = match.model_dump(mode="json", exclude={"id"})
    row["user_id"] = user_id
    return row


class SupabaseStore(CatalogStore, MatchStore):
    """Catalog and match persistence over the Supabase fluent query builder."""

    def __init__(self, client: Client) -> None:
        self._client = client

    # ------------------------------------------------------------------
    # Careers
    # ------------------------------------------------------------------

    def get_active_careers(self, limit: int) -> List[Career]:
        rows = (
            self._client.table(CAREERS_TABLE)
            .select("*")
            .eq("is_active", True)
            .limit(limit)
            .execute()
            .data
        )
        return [Career.model_validate(r) for r in rows or []]

    def get_career_by_id(self, career_id: str) -> Optional[Career]:
        rows = (
            self._client.table(CAREERS_TABLE)
            .select("*")
            .eq("id", career_id)
            .execute()
            .data
        )
        return Career.model_validate(rows[0]) if rows else None

    def update_career_embedding(self, career_id: str, embedding: List[float]) -> None:
        (
            self._client.table(CAREERS_TABLE)
            .update({"embedding": list(embedding)})
            .eq("id", career_id)
            .execute()
        )

    def create_careers(self, careers: List[Career]) -> List[Career]:
        if not careers:
            return []
        rows = (
            self._client.table(CAREERS_TABLE)
            .insert([_career_row(c) for c in careers])
            .execute()
            .data
        )
        return [Career.model_validate(r) for r in rows or []]

    # ------------------------------------------------------------------
    # Career matches
    # ------------------------------------------------------------------

    def delete_matches_for_user(self, user_id: str) -> None:
        result = (
            self._client.table(MATCHES_TABLE)
            .delete()
            .eq("user_id", user_id)
            .execute()
        )
        logger.info("Deleted %s stored matches for user %s", len(result.data or []), user_id)

    def insert_matches(self, user_id: str, matches: List[CareerMatch]) -> List[CareerMatch]:
        if not matches:
            return []
        rows = (
            self._client.table(MATCHES_TABLE)
            .insert([_match_row(user_id, m) for m in matches])
            .execute()
            .data
        )
        return [CareerMatch.model_validate(r) for r in rows or []]

    def get_matches_for_user(self, user_id: str, limit: int = 10) -> List[CareerMatch]:
        rows = (
            self._client.table(MATCHES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("compatibility_score", desc=True)
            .limit(limit)
            .execute()
            .data
        )
        return [CareerMatch.model_validate(r) for r in rows or []]
