"""User profile schema: the semantic snapshot the matching engine reads."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ProficiencyLevel = Literal["beginner", "intermediate", "advanced", "expert"]
ExperienceBracket = Literal["fresher", "0-2", "2-5", "5-10", "10+"]


class Skill(BaseModel):
    """A skill the user claims, with self-assessed proficiency."""

    name: str = Field(..., description="Skill name (e.g. React, SQL)")
    level: ProficiencyLevel = Field(default="beginner", description="Proficiency level")
    verified: bool = Field(default=False, description="True if verified (e.g. from resume parsing)")


class EducationEntry(BaseModel):
    """One education history entry."""

    degree: str = Field(default="", description="Degree (e.g. B.Tech)")
    field: str = Field(default="", description="Field of study")
    institution: str = Field(default="", description="School or university")
    year: Optional[int] = Field(default=None, description="Graduation year")


class UserProfile(BaseModel):
    """Profile data used for embedding and rule-based scoring."""

    title: Optional[str] = Field(default=None, description="Headline, e.g. 'Computer Science Student'")
    bio: Optional[str] = Field(default=None, description="Short free-text bio")
    location: Optional[str] = Field(default=None, description="Preferred or current location")
    experience: Optional[ExperienceBracket] = Field(default=None, description="Experience bracket")
    interests: List[str] = Field(default_factory=list, description="Ordered list of interests")
    skills: List[Skill] = Field(default_factory=list, description="Skills with proficiency")
    education: List[EducationEntry] = Field(default_factory=list, description="Education history")
