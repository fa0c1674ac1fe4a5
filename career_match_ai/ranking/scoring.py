"""Rule-based sub-scores (skills, interests, experience) and the combined compatibility score."""

import math
from typing import List, Optional

from career_match_ai.config import (
    WEIGHT_EXPERIENCE,
    WEIGHT_INTEREST,
    WEIGHT_SIMILARITY,
    WEIGHT_SKILL,
)
from career_match_ai.schemas.career import Career, CareerSkill
from career_match_ai.schemas.user_profile import Skill

LEVELS = {"beginner": 1, "intermediate": 2, "advanced": 3, "expert": 4}

# Level-match score by how many levels the user is below the requirement
LEVEL_MATCH_SCORES = {0: 1.0, 1: 0.7, 2: 0.4}
LEVEL_MATCH_MINIMAL = 0.1

NEUTRAL_INTEREST_SCORE = 0.5
ENTRY_LEVEL_KEYWORDS = ("junior", "trainee")


def user_level_value(level: Optional[str]) -> int:
    """Ordinal of a user's level; unknown counts as 0."""
    return LEVELS.get((level or "").lower(), 0)


def required_level_value(level: Optional[str]) -> int:
    """Ordinal of a required level; unknown counts as 1."""
    return LEVELS.get((level or "").lower(), 1)


def find_user_skill(user_skills: List[Skill], skill_name: str) -> Optional[Skill]:
    """First user skill whose name equals skill_name, ignoring case."""
    wanted = skill_name.lower()
    for skill in user_skills:
        if skill.name.lower() == wanted:
            return skill
    return None


def calculate_level_match(user_level: str, required_level: str) -> float:
    """1.0 if the user meets the level, 0.7 / 0.4 for one / two below, else 0.1."""
    deficit = required_level_value(required_level) - user_level_value(user_level)
    if deficit <= 0:
        return LEVEL_MATCH_SCORES[0]
    return LEVEL_MATCH_SCORES.get(deficit, LEVEL_MATCH_MINIMAL)


def calculate_skill_match(user_skills: List[Skill], career_skills: List[CareerSkill]) -> float:
    """Mean level-match over required skills; skills the user lacks contribute 0."""
    if not user_skills or not career_skills:
        return 0.0
    total = 0.0
    for career_skill in career_skills:
        user_skill = find_user_skill(user_skills, career_skill.name)
        if user_skill:
            total += calculate_level_match(user_skill.level, career_skill.level)
    return total / len(career_skills)


def calculate_interest_match(user_interests: List[str], career: Career) -> float:
    """Fraction of interests found in the career's title, description or industry."""
    if not user_interests:
        return NEUTRAL_INTEREST_SCORE
    career_text = f"{career.title} {career.description} {career.industry or ''}".lower()
    matched = sum(1 for interest in user_interests if interest.lower() in career_text)
    return matched / len(user_interests)


def calculate_experience_match(experience: Optional[str], career: Career) -> float:
    """Freshers score higher on entry-level titles; every other bracket gets a flat 0.8."""
    if experience == "fresher":
        title = career.title.lower()
        return 1.0 if any(kw in title for kw in ENTRY_LEVEL_KEYWORDS) else 0.7
    # TODO: differentiate 0-2 / 2-5 / 5-10 / 10+ against the career's growth_path experience
    return 0.8


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compatibility_score(
    similarity: float,
    skill_match: float,
    interest_match: float,
    experience_match: float,
) -> int:
    """
    Weighted combination of the four factors, scaled to an integer 0-100.
    Raises ValueError if any factor is NaN or infinite.
    """
    factors = (similarity, skill_match, interest_match, experience_match)
    if not all(math.isfinite(f) for f in factors):
        raise ValueError(f"compatibility factors must be finite: {factors}")
    combined = (
        WEIGHT_SIMILARITY * similarity
        + WEIGHT_SKILL * skill_match
        + WEIGHT_INTEREST * interest_match
        + WEIGHT_EXPERIENCE * experience_match
    )
    return max(0, min(100, round_half_up(combined * 100)))
