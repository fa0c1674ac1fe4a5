"""Match output schemas: engine results, stored rows and display shape."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from career_match_ai.schemas.career import Career, CareerSkill, GrowthStep, SalaryRange

# Number of career skills shown with a match
DISPLAY_SKILL_COUNT = 5


class SkillGap(BaseModel):
    """A required skill the user lacks or holds below the required level."""

    skill: str = Field(..., description="Skill name as listed by the career")
    current_level: str = Field(..., description="User's level, or 'none' if absent")
    required_level: str = Field(..., description="Level the career requires")


class EnhancedMatch(BaseModel):
    """A match joined with current career data, ready for display."""

    id: str
    title: str
    description: str = ""
    compatibility_score: int = Field(..., ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)
    skill_gaps: List[SkillGap] = Field(default_factory=list)
    salary_range: Optional[SalaryRange] = None
    skills: List[CareerSkill] = Field(default_factory=list, description="First few career skills")
    industry: Optional[str] = None
    locations: List[str] = Field(default_factory=list)
    growth_path: List[GrowthStep] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)

    @classmethod
    def from_career(
        cls,
        match_id: str,
        career: Career,
        compatibility_score: int,
        match_reasons: List[str],
        skill_gaps: List[SkillGap],
    ) -> "EnhancedMatch":
        return cls(
            id=match_id,
            title=career.title,
            description=career.description,
            compatibility_score=compatibility_score,
            match_reasons=list(match_reasons),
            skill_gaps=list(skill_gaps),
            salary_range=career.salary_range,
            skills=career.skills[:DISPLAY_SKILL_COUNT],
            industry=career.industry,
            locations=list(career.locations),
            growth_path=list(career.growth_path),
            requirements=list(career.requirements),
        )


class MatchingResult(BaseModel):
    """One ranked (user, career) match as returned by the engine."""

    career: Career
    compatibility_score: int = Field(..., ge=0, le=100, description="0-100 compatibility")
    match_reasons: List[str] = Field(default_factory=list, description="Human-readable reasons")
    skill_gaps: List[SkillGap] = Field(default_factory=list, description="Skills to develop")

    def to_enhanced_match(self) -> EnhancedMatch:
        return EnhancedMatch.from_career(
            self.career.id,
            self.career,
            self.compatibility_score,
            self.match_reasons,
            self.skill_gaps,
        )


class CareerMatch(BaseModel):
    """A persisted match row (career referenced by id)."""

    id: str = Field(default="", description="Row id, assigned by the store")
    user_id: str
    career_id: str
    compatibility_score: int = Field(..., ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)
    skill_gaps: List[SkillGap] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, user_id: str, result: MatchingResult) -> "CareerMatch":
        return cls(
            user_id=user_id,
            career_id=result.career.id,
            compatibility_score=result.compatibility_score,
            match_reasons=list(result.match_reasons),
            skill_gaps=list(result.skill_gaps),
        )
