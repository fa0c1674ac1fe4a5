"""Schema exports."""

from .career import Career, CareerSkill, GrowthStep, SalaryRange
from .career_match import CareerMatch, EnhancedMatch, MatchingResult, SkillGap
from .user_profile import EducationEntry, Skill, UserProfile

__all__ = [
    "Career",
    "CareerSkill",
    "GrowthStep",
    "SalaryRange",
    "CareerMatch",
    "EnhancedMatch",
    "MatchingResult",
    "SkillGap",
    "EducationEntry",
    "Skill",
    "UserProfile",
]
