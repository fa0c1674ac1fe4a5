"""Tests for career_match_ai.ranking.matching_engine: ranking pipeline, persistence and read side."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from career_match_ai.embeddings.embedding_service import EmbeddingService
from career_match_ai.errors import CareerNotFound, MatchGenerationFailed, NoCareersAvailable
from career_match_ai.ranking.explanation import REASON_GOOD_FOUNDATION, REASON_INTERESTS, REASON_TRANSITION
from career_match_ai.ranking.matching_engine import MatchingEngine, clamp_match_limit, run_career_matching
from career_match_ai.schemas import CareerMatch, CareerSkill, Skill, SkillGap, UserProfile
from career_match_ai.storage import InMemoryStore
from tests.conftest import FakeEmbeddingProvider, make_career, stored_scores

USER_ID = "user-1"


def _engine(service, store, **kwargs) -> MatchingEngine:
    return MatchingEngine(service, store, store, **kwargs)


def _generate(engine, profile, limit=10, user_id=USER_ID):
    return asyncio.run(engine.generate_career_matches(user_id, profile, limit))


def _catalog(n: int):
    """n careers with decreasing similarity to the user vector [1, 0]."""
    return [make_career(f"c{i}", f"Career {i}", embedding=[1.0, i * 0.2]) for i in range(n)]


class TestFullStackScenario:
    def test_scores_reasons_and_gaps(self, embedding_service, store, fresher_profile):
        matches = _generate(_engine(embedding_service, store), fresher_profile)

        assert len(matches) == 1
        match = matches[0]
        # 0.4 * cos45 + 0.35 * 0.5 + 0.15 * 1.0 + 0.1 * 0.7 = 0.6778
        assert match.compatibility_score == 68
        assert match.match_reasons == [REASON_GOOD_FOUNDATION, REASON_INTERESTS, REASON_TRANSITION]
        assert match.skill_gaps == [SkillGap(skill="Node.js", current_level="none", required_level="advanced")]
        assert match.career.id == "career-fullstack"

    def test_matches_are_persisted(self, embedding_service, store, fresher_profile):
        _generate(_engine(embedding_service, store), fresher_profile)
        assert stored_scores(store, USER_ID) == {"career-fullstack": 68}


class TestFailures:
    def test_empty_catalog(self, embedding_service, fresher_profile):
        with pytest.raises(NoCareersAvailable):
            _generate(_engine(embedding_service, InMemoryStore()), fresher_profile)

    def test_only_inactive_careers(self, embedding_service, fresher_profile):
        store = InMemoryStore([make_career("c1", "Old Role", embedding=[1.0, 0.0], is_active=False)])
        with pytest.raises(NoCareersAvailable):
            _generate(_engine(embedding_service, store), fresher_profile)

    def test_no_careers_is_a_generation_failure(self):
        assert issubclass(NoCareersAvailable, MatchGenerationFailed)

    def test_profile_embedding_failure(self, store, fresher_profile):
        service = EmbeddingService([FakeEmbeddingProvider(fail_on=["Experience level"])])
        store.insert_matches(USER_ID, [CareerMatch(user_id=USER_ID, career_id="career-fullstack", compatibility_score=50)])

        with pytest.raises(MatchGenerationFailed):
            _generate(_engine(service, store), fresher_profile)
        # previous set untouched, nothing new persisted
        assert stored_scores(store, USER_ID) == {"career-fullstack": 50}

    def test_catalog_failure(self, embedding_service, fresher_profile):
        catalog = MagicMock()
        catalog.get_active_careers.side_effect = ConnectionError("db down")
        engine = MatchingEngine(embedding_service, catalog, InMemoryStore())
        with pytest.raises(MatchGenerationFailed):
            _generate(engine, fresher_profile)

    def test_failing_career_is_skipped(self, fresher_profile):
        provider = FakeEmbeddingProvider(fail_on=["Broken Role"])
        store = InMemoryStore([
            make_career("c1", "Broken Role"),
            make_career("c2", "Working Role"),
        ])
        matches = _generate(_engine(EmbeddingService([provider]), store), fresher_profile)
        assert [m.career.id for m in matches] == ["c2"]

    def test_dimension_mismatch_career_is_skipped(self, embedding_service, fresher_profile):
        store = InMemoryStore([
            make_career("c1", "Three Dims", embedding=[1.0, 0.0, 0.0]),
            make_career("c2", "Two Dims", embedding=[1.0, 0.0]),
        ])
        matches = _generate(_engine(embedding_service, store), fresher_profile)
        assert [m.career.id for m in matches] == ["c2"]

    @pytest.mark.parametrize("bad_value", [float("nan"), float("inf")])
    def test_non_finite_embedding_career_is_skipped(self, embedding_service, fresher_profile, bad_value):
        store = InMemoryStore([
            make_career("bad", "Corrupt Role", embedding=[bad_value, 1.0]),
            make_career("ok", "Healthy Role", embedding=[1.0, 0.0]),
        ])

        matches = _generate(_engine(embedding_service, store), fresher_profile)

        assert [m.career.id for m in matches] == ["ok"]
        assert set(stored_scores(store, USER_ID)) == {"ok"}

    def test_explanation_failure_skips_only_that_career(self, embedding_service, fresher_profile):
        store = InMemoryStore([
            make_career("bad", "Role A", embedding=[1.0, 0.0]),
            make_career("ok", "Role B", embedding=[1.0, 0.0]),
        ])

        def explain(profile, career, *args):
            if career.id == "bad":
                raise KeyError("broken skill data")
            return [], []

        with patch("career_match_ai.ranking.matching_engine.generate_match_explanation", side_effect=explain):
            matches = _generate(_engine(embedding_service, store), fresher_profile)

        assert [m.career.id for m in matches] == ["ok"]

    def test_persistence_failure_still_returns_matches(self, embedding_service, store, fresher_profile):
        match_store = MagicMock()
        match_store.delete_matches_for_user.side_effect = RuntimeError("write failed")
        engine = MatchingEngine(embedding_service, store, match_store)

        matches = _generate(engine, fresher_profile)

        assert [m.compatibility_score for m in matches] == [68]
        match_store.insert_matches.assert_not_called()

    def test_invalid_limit(self, embedding_service, store, fresher_profile):
        with pytest.raises(ValueError):
            _generate(_engine(embedding_service, store), fresher_profile, limit=0)


class TestRankingInvariants:
    def test_threshold_excludes_low_scores(self, embedding_service):
        profile = UserProfile(experience="2-5", interests=["astronomy"])
        # similarity 0, skills 0, interests 0, experience 0.8 -> 8
        store = InMemoryStore([make_career("c1", "Accountant", embedding=[0.0, 1.0])])
        assert _generate(_engine(embedding_service, store), profile) == []

    def test_sorted_bounded_and_limited(self, embedding_service, fresher_profile):
        store = InMemoryStore(_catalog(8))
        matches = _generate(_engine(embedding_service, store), fresher_profile, limit=3)

        scores = [m.compatibility_score for m in matches]
        assert len(matches) == 3
        assert scores == sorted(scores, reverse=True)
        assert all(30 < s <= 100 for s in scores)
        assert [m.career.id for m in matches] == ["c0", "c1", "c2"]

    def test_ties_keep_catalog_order(self, embedding_service, fresher_profile):
        careers = [make_career(f"c{i}", f"Role {i}", embedding=[1.0, 0.0]) for i in range(4)]
        matches = _generate(_engine(embedding_service, InMemoryStore(careers), concurrency=2), fresher_profile)
        assert [m.career.id for m in matches] == ["c0", "c1", "c2", "c3"]

    def test_deterministic(self, embedding_service, fresher_profile):
        engine = _engine(embedding_service, InMemoryStore(_catalog(6)))
        first = _generate(engine, fresher_profile)
        second = _generate(engine, fresher_profile)
        assert [(m.career.id, m.compatibility_score, m.match_reasons) for m in first] == [
            (m.career.id, m.compatibility_score, m.match_reasons) for m in second
        ]

    def test_higher_skill_level_never_lowers_score(self, embedding_service):
        career = make_career(
            "c1", "Backend Engineer", embedding=[1.0, 0.0],
            skills=[CareerSkill(name="Go", level="expert"), CareerSkill(name="SQL", level="advanced")],
        )
        engine = _engine(embedding_service, InMemoryStore([career]))
        previous = 0
        for level in ["beginner", "intermediate", "advanced", "expert"]:
            profile = UserProfile(skills=[Skill(name="Go", level=level)])
            score = _generate(engine, profile)[0].compatibility_score
            assert score >= previous
            previous = score


class TestPersistence:
    def test_previous_set_is_replaced(self, embedding_service, fresher_profile):
        store = InMemoryStore(_catalog(3))
        store.insert_matches(USER_ID, [CareerMatch(user_id=USER_ID, career_id="stale", compatibility_score=99)])

        _generate(_engine(embedding_service, store), fresher_profile)

        assert set(stored_scores(store, USER_ID)) == {"c0", "c1", "c2"}

    def test_other_users_untouched(self, embedding_service, store, fresher_profile):
        store.insert_matches("someone-else", [CareerMatch(user_id="someone-else", career_id="x", compatibility_score=40)])
        _generate(_engine(embedding_service, store), fresher_profile)
        assert stored_scores(store, "someone-else") == {"x": 40}


class TestEmbeddingCache:
    def test_cached_embedding_is_not_recomputed(self, fake_provider, embedding_service, store, fresher_profile):
        _generate(_engine(embedding_service, store), fresher_profile)
        assert len(fake_provider.calls) == 1  # profile only

    def test_missing_embedding_computed_without_write_back(self, embedding_service, fresher_profile):
        store = InMemoryStore([make_career("c1", "Fresh Role")])
        _generate(_engine(embedding_service, store, cache_embeddings=False), fresher_profile)
        assert store.get_career_by_id("c1").embedding is None

    def test_write_back_when_enabled(self, embedding_service, fresher_profile):
        store = InMemoryStore([make_career("c1", "Fresh Role")])
        engine = _engine(embedding_service, store, cache_embeddings=True)

        async def run():
            matches = await engine.generate_career_matches(USER_ID, fresher_profile, 5)
            await engine.wait_for_background_tasks()
            return matches

        asyncio.run(run())
        assert store.get_career_by_id("c1").embedding == [1.0, 0.0]

    def test_write_back_failure_does_not_affect_result(self, embedding_service, fresher_profile):
        store = InMemoryStore([make_career("c1", "Fresh Role")])
        store.update_career_embedding = MagicMock(side_effect=RuntimeError("read-only"))
        engine = _engine(embedding_service, store, cache_embeddings=True)

        matches = run_career_matching(engine, USER_ID, fresher_profile, 5)

        assert [m.career.id for m in matches] == ["c1"]
        store.update_career_embedding.assert_called_once()


class TestTimeouts:
    def test_slow_career_embedding_is_skipped(self, fresher_profile):
        provider = FakeEmbeddingProvider(delay=0.0)
        slow = FakeEmbeddingProvider(delay=0.5, name="slow")

        class Routing(FakeEmbeddingProvider):
            def generate_embedding(self, text):
                return (slow if "Slow Role" in text else provider).generate_embedding(text)

        store = InMemoryStore([make_career("c1", "Slow Role"), make_career("c2", "Quick Role")])
        engine = _engine(EmbeddingService([Routing()]), store, embedding_timeout=0.1)
        matches = _generate(engine, fresher_profile)
        assert [m.career.id for m in matches] == ["c2"]

    def test_overall_timeout(self, store, fresher_profile):
        service = EmbeddingService([FakeEmbeddingProvider(delay=0.5)])
        engine = _engine(service, store)
        with pytest.raises(MatchGenerationFailed, match="timed out"):
            run_career_matching(engine, USER_ID, fresher_profile, timeout=0.05)


class TestSyncEntryPoint:
    def test_returns_ranked_matches(self, embedding_service, store, fresher_profile):
        matches = run_career_matching(_engine(embedding_service, store), USER_ID, fresher_profile)
        assert [m.compatibility_score for m in matches] == [68]

    @pytest.mark.parametrize("requested, expected", [(None, 10), (0, 1), (5, 5), (50, 20), (-3, 1)])
    def test_clamp_match_limit(self, requested, expected):
        assert clamp_match_limit(requested) == expected


class TestReadSide:
    def test_enhanced_matches_join_career_data(self, embedding_service, store, fresher_profile):
        engine = _engine(embedding_service, store)
        _generate(engine, fresher_profile)

        enhanced = engine.get_enhanced_career_matches(USER_ID)

        assert len(enhanced) == 1
        assert enhanced[0].title == "Full Stack Developer"
        assert enhanced[0].compatibility_score == 68
        assert enhanced[0].locations == ["Bangalore", "Pune"]
        assert enhanced[0].skill_gaps[0].skill == "Node.js"

    def test_enhanced_drops_missing_careers(self, embedding_service, store):
        store.insert_matches(USER_ID, [
            CareerMatch(user_id=USER_ID, career_id="deleted-career", compatibility_score=90),
            CareerMatch(user_id=USER_ID, career_id="career-fullstack", compatibility_score=70),
        ])
        enhanced = _engine(embedding_service, store).get_enhanced_career_matches(USER_ID)
        assert [e.title for e in enhanced] == ["Full Stack Developer"]

    def test_enhanced_does_not_rescore(self, fake_provider, embedding_service, store):
        store.insert_matches(USER_ID, [CareerMatch(user_id=USER_ID, career_id="career-fullstack", compatibility_score=42)])
        enhanced = _engine(embedding_service, store).get_enhanced_career_matches(USER_ID)
        assert enhanced[0].compatibility_score == 42
        assert fake_provider.calls == []

    def test_career_details_with_match_score(self, embedding_service, store, fresher_profile):
        engine = _engine(embedding_service, store)
        _generate(engine, fresher_profile)

        details = engine.get_career_details("career-fullstack", USER_ID)

        assert "embedding" not in details
        assert details["title"] == "Full Stack Developer"
        assert details["match_score"]["compatibility_score"] == 68

    def test_career_details_without_user(self, embedding_service, store):
        details = _engine(embedding_service, store).get_career_details("career-fullstack")
        assert details["match_score"] is None

    def test_career_details_unknown_career(self, embedding_service, store):
        with pytest.raises(CareerNotFound):
            _engine(embedding_service, store).get_career_details("nope")
