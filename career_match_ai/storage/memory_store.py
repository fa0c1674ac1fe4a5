"""In-process catalog and match store (tests, demos, single-process use)."""

import threading
import uuid
from typing import Dict, List, Optional

from career_match_ai.schemas.career import Career
from career_match_ai.schemas.career_match import CareerMatch
from career_match_ai.storage.base import CatalogStore, MatchStore


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryStore(CatalogStore, MatchStore):
    """Keeps careers in insertion order and matches keyed by user id."""

    def __init__(self, careers: Optional[List[Career]] = None) -> None:
        self._lock = threading.Lock()
        self._careers: Dict[str, Career] = {}
        self._matches: Dict[str, List[CareerMatch]] = {}
        if careers:
            self.create_careers(careers)

    # Catalog

    def get_active_careers(self, limit: int) -> List[Career]:
        with self._lock:
            active = [c for c in self._careers.values() if c.is_active]
        return [c.model_copy(deep=True) for c in active[:limit]]

    def get_career_by_id(self, career_id: str) -> Optional[Career]:
        with self._lock:
            career = self._careers.get(career_id)
        return career.model_copy(deep=True) if career else None

    def update_career_embedding(self, career_id: str, embedding: List[float]) -> None:
        with self._lock:
            career = self._careers.get(career_id)
            if career is None:
                raise KeyError(career_id)
            self._careers[career_id] = career.model_copy(update={"embedding": list(embedding)})

    def create_careers(self, careers: List[Career]) -> List[Career]:
        created = []
        with self._lock:
            for career in careers:
                stored = career.model_copy(update={"id": career.id or _new_id()}, deep=True)
                self._careers[stored.id] = stored
                created.append(stored)
        return created

    # Matches

    def delete_matches_for_user(self, user_id: str) -> None:
        with self._lock:
            self._matches.pop(user_id, None)

    def insert_matches(self, user_id: str, matches: List[CareerMatch]) -> List[CareerMatch]:
        stored = [
            m.model_copy(update={"id": m.id or _new_id(), "user_id": user_id}, deep=True)
            for m in matches
        ]
        with self._lock:
            self._matches.setdefault(user_id, []).extend(stored)
        return stored

    def get_matches_for_user(self, user_id: str, limit: int = 10) -> List[CareerMatch]:
        with self._lock:
            rows = list(self._matches.get(user_id, []))
        rows.sort(key=lambda m: -m.compatibility_score)
        return [m.model_copy(deep=True) for m in rows[:limit]]
