"""Match explanation: human-readable reasons and skill gaps for a scored career."""

from typing import List, Tuple

from career_match_ai.ranking.scoring import find_user_skill, required_level_value, user_level_value
from career_match_ai.schemas.career import Career
from career_match_ai.schemas.career_match import SkillGap
from career_match_ai.schemas.user_profile import UserProfile

REASON_STRONG_SKILLS = "Strong skill alignment with your technical background"
REASON_GOOD_FOUNDATION = "Good foundation with some skill development needed"
REASON_INTERESTS = "Aligns well with your stated interests"
REASON_EXCELLENT_FIT = "Excellent overall fit based on your profile"
REASON_TRANSITION = "Good career transition opportunity"

NO_LEVEL = "none"


def compute_skill_gaps(profile: UserProfile, career: Career) -> List[SkillGap]:
    """
    One gap per required skill the user lacks (current_level 'none') or holds below
    the required level, in the career's skill order.
    """
    gaps: List[SkillGap] = []
    for career_skill in career.skills:
        user_skill = find_user_skill(profile.skills, career_skill.name)
        if user_skill is None:
            gaps.append(
                SkillGap(skill=career_skill.name, current_level=NO_LEVEL, required_level=career_skill.level)
            )
        elif user_level_value(user_skill.level) < required_level_value(career_skill.level):
            gaps.append(
                SkillGap(
                    skill=career_skill.name,
                    current_level=user_skill.level,
                    required_level=career_skill.level,
                )
            )
    return gaps


def generate_match_explanation(
    profile: UserProfile,
    career: Career,
    compatibility_score: int,
    skill_match: float,
    interest_match: float,
) -> Tuple[List[str], List[SkillGap]]:
    """Return (match_reasons, skill_gaps)."""
    reasons: List[str] = []
    if skill_match > 0.7:
        reasons.append(REASON_STRONG_SKILLS)
    elif skill_match > 0.4:
        reasons.append(REASON_GOOD_FOUNDATION)

    if interest_match > 0.5:
        reasons.append(REASON_INTERESTS)

    if compatibility_score > 80:
        reasons.append(REASON_EXCELLENT_FIT)
    elif compatibility_score > 60:
        reasons.append(REASON_TRANSITION)

    return reasons, compute_skill_gaps(profile, career)
