"""Profile models.

Profiles cross three boundaries (prompts, model output, persistence) in
camelCase JSON, so unlike the other entities they are pydantic models with
camelCase aliases.  Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """Everything the questionnaire collects about the current user."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str
    bio: str | None = None
    birth_date: str | None = None

    values: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    lifestyle: list[str] = Field(default_factory=list)

    work_schedule: str | None = None
    industry: str | None = None
    education: str | None = None
    languages: list[str] = Field(default_factory=list)

    salary_range: str | None = None
    height: str | None = None
    dietary_preferences: str | None = None

    opt_in_astrology: bool = False
    opt_in_attractiveness: bool = False
    opt_in_salary: bool = False

    age_confirmed: bool = False
    photo_uploaded: bool = False
    liveness_verified: bool = False
    consent_given: bool = False

    # Personality
    friends_describe: str | None = None
    proudest_achievement: str | None = None
    planner_or_spontaneous: str | None = None
    stress_reaction: str | None = None
    what_makes_you_laugh: str | None = None
    core_value: str | None = None
    intro_extrovert: str | None = None
    biggest_flaw: str | None = None

    # Lifestyle
    perfect_day: str | None = None
    morning_or_night: str | None = None
    exercise_habit: str | None = None
    weekend_activity: str | None = None
    pets: str | None = None
    cook_or_eat_out: str | None = None
    smoking_drinking: str | None = None
    spirituality: str | None = None

    # Career
    passionate_about_work: str | None = None
    biggest_dream: str | None = None
    financial_importance: int | None = None
    travel_experience: str | None = None

    # Relationships
    looking_for: str | None = None
    healthy_relationship: str | None = None
    partner_quality: str | None = None
    conflict_style: str | None = None
    love_language: str | None = None
    want_children: str | None = None

    # Compatibility & deal-breakers
    attractive_quality: str | None = None
    deal_breaker: str | None = None
    long_distance: str | None = None
    fidelity_view: str | None = None
    pace_in_relationship: str | None = None
    personal_space: str | None = None

    # Fun & essence
    life_as_movie: str | None = None
    surprising_fact: str | None = None
    if_couldnt_fail: str | None = None

    # AI-derived
    authenticity_score: float | None = None
    consistency_flags: list[str] | None = None

    @field_validator("financial_importance", mode="before")
    @classmethod
    def _scale_or_none(cls, value: Any) -> Any:
        # Generated profiles sometimes answer with a word ("high"); drop it.
        if isinstance(value, str):
            value = value.strip()
            return int(value) if value.removeprefix("-").isdigit() else None
        return value

    def to_prompt_dict(self) -> dict[str, Any]:
        """camelCase view without unset fields, as embedded in prompts."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MatchProfile(UserProfile):
    """A candidate profile the user may be matched with."""

    id: str
    image_url: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
