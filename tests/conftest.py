"""Shared pytest fixtures for Career Match AI tests."""

import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from career_match_ai.embeddings.embedding_service import EmbeddingProvider, EmbeddingService
from career_match_ai.errors import ProviderError
from career_match_ai.schemas import Career, CareerSkill, Skill, UserProfile
from career_match_ai.storage import InMemoryStore

USER_VECTOR = [1.0, 0.0]


class FakeEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic provider: the first rule whose substring occurs in the text picks the vector.
    Texts containing any `fail_on` substring raise ProviderError.
    """

    def __init__(
        self,
        rules: Sequence[Tuple[str, List[float]]] = (),
        default: Optional[List[float]] = None,
        fail_on: Iterable[str] = (),
        name: str = "fake",
        dimension: int = 2,
        delay: float = 0.0,
    ) -> None:
        self.rules = list(rules)
        self.default = default if default is not None else list(USER_VECTOR)
        self.fail_on = list(fail_on)
        self.name = name
        self._dimension = dimension
        self.delay = delay
        self.calls: List[str] = []

    @property
    def default_dimension(self) -> int:
        return self._dimension

    def generate_embedding(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.delay:
            time.sleep(self.delay)
        if any(f in text for f in self.fail_on):
            raise ProviderError(f"{self.name} cannot embed this text")
        for needle, vec in self.rules:
            if needle in text:
                return list(vec)
        return list(self.default)


@pytest.fixture()
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture()
def embedding_service(fake_provider: FakeEmbeddingProvider) -> EmbeddingService:
    return EmbeddingService([fake_provider])


@pytest.fixture()
def fresher_profile() -> UserProfile:
    return UserProfile(
        title="Computer Science Student",
        bio="Final-year student who enjoys building web apps.",
        experience="fresher",
        interests=["technology"],
        skills=[Skill(name="React", level="advanced", verified=True)],
    )


@pytest.fixture()
def full_stack_career() -> Career:
    return Career(
        id="career-fullstack",
        title="Full Stack Developer",
        description="Build end-to-end web applications with modern technology stacks.",
        industry="Technology",
        skills=[
            CareerSkill(name="React", level="advanced", category="technical"),
            CareerSkill(name="Node.js", level="advanced", category="technical"),
        ],
        locations=["Bangalore", "Pune"],
        embedding=[1.0, 1.0],
    )


def make_career(career_id: str, title: str, embedding: Optional[List[float]] = None, **kwargs) -> Career:
    return Career(
        id=career_id,
        title=title,
        description=kwargs.pop("description", f"{title} role"),
        industry=kwargs.pop("industry", "Technology"),
        embedding=embedding,
        **kwargs,
    )


@pytest.fixture()
def store(full_stack_career: Career) -> InMemoryStore:
    return InMemoryStore([full_stack_career])


def stored_scores(store: InMemoryStore, user_id: str) -> Dict[str, int]:
    return {m.career_id: m.compatibility_score for m in store.get_matches_for_user(user_id, 100)}
