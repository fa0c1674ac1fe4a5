"""Career catalog schema."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from career_match_ai.schemas.user_profile import ProficiencyLevel

SkillCategory = Literal["technical", "soft", "domain"]


class CareerSkill(BaseModel):
    """A skill a career requires, at a minimum proficiency level."""

    name: str = Field(..., description="Skill name")
    level: ProficiencyLevel = Field(default="beginner", description="Required proficiency level")
    category: SkillCategory = Field(default="technical", description="technical, soft or domain")


class SalaryRange(BaseModel):
    min: float = Field(default=0, description="Lower bound")
    max: float = Field(default=0, description="Upper bound")
    currency: str = Field(default="", description="Currency / unit, e.g. INR_LPA")


class GrowthStep(BaseModel):
    """One rung of a career's growth ladder."""

    level: str = Field(default="", description="Junior, Mid, Senior, Lead ...")
    title: str = Field(default="", description="Title at this level")
    salary_range: Optional[SalaryRange] = Field(default=None, description="Salary at this level")
    experience: str = Field(default="", description="Typical experience, e.g. '2-5 years'")


class Career(BaseModel):
    """A catalog entry that users are matched against."""

    id: str = Field(default="", description="Catalog id")
    title: str = Field(..., description="Career title")
    description: str = Field(default="", description="What the role does")
    industry: Optional[str] = Field(default=None, description="Industry (e.g. Technology)")
    requirements: List[str] = Field(default_factory=list, description="Responsibilities / requirements")
    skills: List[CareerSkill] = Field(default_factory=list, description="Required skills")
    salary_range: Optional[SalaryRange] = Field(default=None, description="Typical salary range")
    locations: List[str] = Field(default_factory=list, description="Cities where the role is common")
    growth_path: List[GrowthStep] = Field(default_factory=list, description="Career ladder")
    embedding: Optional[List[float]] = Field(default=None, description="Pre-computed embedding, if cached")
    is_active: bool = Field(default=True, description="Inactive careers are never matched")

    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def public_dict(self) -> Dict[str, Any]:
        """Career as a dict without the embedding (for display / API responses)."""
        return self.model_dump(exclude={"embedding"})
