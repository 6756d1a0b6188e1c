"""Schemas for the plan generation endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from dreampath.api.schemas.common import (
    CamelModel,
    ExperienceLevel,
    GoalCategory,
    GoalPriority,
    UsagePayload,
)


class GoalInput(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: GoalCategory = "OTHER"
    priority: GoalPriority = "MEDIUM"
    start_date: Optional[str] = None
    target_date: str = Field(..., min_length=1)


class UserProfile(CamelModel):
    age: Optional[int] = None
    occupation: Optional[str] = None
    education_level: Optional[str] = None


class UserFinances(CamelModel):
    monthly_budget: Optional[float] = None
    currency: Optional[str] = None


class TimeAvailability(CamelModel):
    daily_available_hours: float = Field(..., gt=0, le=24)
    preferred_time_slots: List[str] = Field(default_factory=list)
    busy_days: List[str] = Field(default_factory=list)


class UserSkills(CamelModel):
    experience_level: ExperienceLevel = "beginner"
    existing_skills: List[str] = Field(default_factory=list)
    learning_interests: List[str] = Field(default_factory=list)


class UserChallenges(CamelModel):
    selected: List[str] = Field(default_factory=list)
    custom: Optional[str] = None


class UserContext(CamelModel):
    id: Optional[str] = None
    display_name: Optional[str] = None
    profile: Optional[UserProfile] = None
    finances: Optional[UserFinances] = None
    time_availability: TimeAvailability
    skills: UserSkills = Field(default_factory=UserSkills)
    challenges: Optional[UserChallenges] = None


class PlanGenerationRequest(CamelModel):
    goal: GoalInput
    user: UserContext


class SimplePlanRequest(CamelModel):
    goal: str = Field(..., min_length=1)
    target_date: str = Field(..., min_length=1)
    start_date: Optional[str] = None
    description: Optional[str] = None
    category: GoalCategory = "OTHER"
    daily_hours: float = Field(default=2, gt=0, le=24)
    experience_level: ExperienceLevel = "beginner"
    occupation: Optional[str] = None
    challenges: List[str] = Field(default_factory=list)

    def to_plan_request(self) -> PlanGenerationRequest:
        """Lift the flat body into the full request shape the prompt compiler expects."""
        return PlanGenerationRequest(
            goal=GoalInput(
                title=self.goal,
                description=self.description,
                category=self.category,
                start_date=self.start_date,
                target_date=self.target_date,
            ),
            user=UserContext(
                profile=UserProfile(occupation=self.occupation) if self.occupation else None,
                time_availability=TimeAvailability(daily_available_hours=self.daily_hours),
                skills=UserSkills(experience_level=self.experience_level),
                challenges=UserChallenges(selected=list(self.challenges)) if self.challenges else None,
            ),
        )


class CoverageWarningPayload(CamelModel):
    week_number: int
    day_of_week: int
    kind: str
    message: str


class PlanMetadata(CamelModel):
    generated_at: datetime
    days_until_target: int
    weeks_until_target: int
    num_milestones: int
    model: str
    coverage_warnings: List[CoverageWarningPayload] = Field(default_factory=list)


class GeneratePlanResponse(CamelModel):
    success: bool = True
    plan: Dict[str, Any]
    metadata: PlanMetadata
    usage: UsagePayload


class SimplePlanResponse(CamelModel):
    success: bool = True
    plan: Dict[str, Any]
    usage: UsagePayload
