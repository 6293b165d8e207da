from __future__ import annotations

from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_EDUCATION_LEVEL, DEFAULT_YEARS_EXPERIENCE
from .normalize import coerce_education_level, is_valid_education_level


def _skills_or_empty(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, str):
        # A single comma separated string from a loose upstream record
        return [s for s in (part.strip() for part in v.split(",")) if s]
    if isinstance(v, (list, tuple, set, frozenset)):
        return list(v)
    raise ValueError(f"skills must be a list of strings, got {type(v).__name__}")


def _education_or_default(v: Any) -> int:
    level = coerce_education_level(v)
    if level is None:
        return DEFAULT_EDUCATION_LEVEL
    if not is_valid_education_level(level):
        raise ValueError(f"education level must be between 1 and 4, got {level}")
    return level


class JobRequirements(BaseModel):
    """Parsed requirements of a single job posting."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    tech_stack: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("tech_stack", "techStack"),
        description="Skills/technologies required by the posting",
    )
    min_years_experience: float = Field(
        default=DEFAULT_YEARS_EXPERIENCE,
        ge=0,
        validation_alias=AliasChoices("min_years_experience", "min_yoe", "minYearsExperience"),
    )
    required_education_level: int = Field(
        default=DEFAULT_EDUCATION_LEVEL,
        validation_alias=AliasChoices("required_education_level", "req_edu", "requiredEducationLevel"),
        description="1=High School, 2=Bachelor, 3=Master, 4=PhD",
    )
    is_entry_level: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_entry_level", "isEntryLevel"),
    )

    @field_validator("tech_stack", mode="before")
    @classmethod
    def default_tech_stack(cls, v: Any) -> List[str]:
        return _skills_or_empty(v)

    @field_validator("min_years_experience", mode="before")
    @classmethod
    def default_min_years(cls, v: Any) -> Any:
        return DEFAULT_YEARS_EXPERIENCE if v is None else v

    @field_validator("required_education_level", mode="before")
    @classmethod
    def parse_required_education(cls, v: Any) -> int:
        return _education_or_default(v)

    @field_validator("is_entry_level", mode="before")
    @classmethod
    def default_entry_level(cls, v: Any) -> Any:
        return False if v is None else v


class CandidateProfile(BaseModel):
    """The candidate side of a match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    skill_bank: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("skill_bank", "skillBank", "skills"),
    )
    education_level: int = Field(
        default=DEFAULT_EDUCATION_LEVEL,
        validation_alias=AliasChoices("education_level", "edu_level", "educationLevel"),
    )
    current_years_experience: float = Field(
        default=DEFAULT_YEARS_EXPERIENCE,
        ge=0,
        validation_alias=AliasChoices(
            "current_years_experience", "current_yoe", "currentYearsExperience", "total_years_experience"
        ),
    )

    @field_validator("skill_bank", mode="before")
    @classmethod
    def default_skill_bank(cls, v: Any) -> List[str]:
        return _skills_or_empty(v)

    @field_validator("education_level", mode="before")
    @classmethod
    def parse_education(cls, v: Any) -> int:
        return _education_or_default(v)

    @field_validator("current_years_experience", mode="before")
    @classmethod
    def default_current_years(cls, v: Any) -> Any:
        return DEFAULT_YEARS_EXPERIENCE if v is None else v


class ScoreBreakdown(BaseModel):
    """Every intermediate value of one scoring run, for explainability."""

    match_score: int = Field(ge=0, le=100)
    base_score: float
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    education_multiplier: float
    experience_multiplier: float
    entry_level_bypass: bool = False
    entry_level_boost_applied: bool = False
    raw_score: float
