"""Abstract stores the matching engine depends on."""

from abc import ABC, abstractmethod
from typing import List, Optional

from career_match_ai.schemas.career import Career
from career_match_ai.schemas.career_match import CareerMatch


class CatalogStore(ABC):
    """Read access to the career catalog, plus embedding write-back and seeding."""

    @abstractmethod
    def get_active_careers(self, limit: int) -> List[Career]:
        """Up to `limit` active careers, in store-defined order."""
        ...

    @abstractmethod
    def get_career_by_id(self, career_id: str) -> Optional[Career]:
        ...

    @abstractmethod
    def update_career_embedding(self, career_id: str, embedding: List[float]) -> None:
        ...

    @abstractmethod
    def create_careers(self, careers: List[Career]) -> List[Career]:
        """Insert careers; returns them with store-assigned ids."""
        ...


class MatchStore(ABC):
    """Per-user ranked match sets."""

    @abstractmethod
    def delete_matches_for_user(self, user_id: str) -> None:
        ...

    @abstractmethod
    def insert_matches(self, user_id: str, matches: List[CareerMatch]) -> List[CareerMatch]:
        """Insert matches for user_id; returns them with store-assigned ids."""
        ...

    @abstractmethod
    def get_matches_for_user(self, user_id: str, limit: int = 10) -> List[CareerMatch]:
        """Stored matches for user_id, highest compatibility first."""
        ...
