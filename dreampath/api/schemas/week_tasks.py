"""Schemas for batch week-task generation."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from dreampath.api.schemas.common import CamelModel, ExperienceLevel, UsagePayload


class WeekTasksGoal(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: str = "OTHER"


class WeekTasksMilestone(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    week_number: Optional[int] = None


class WeekTasksUser(CamelModel):
    experience_level: ExperienceLevel = "beginner"
    daily_available_hours: float = Field(default=2, gt=0, le=24)
    occupation: Optional[str] = None
    challenges: List[str] = Field(default_factory=list)


class WeekRange(CamelModel):
    start_week: int = Field(..., ge=1)
    end_week: int = Field(..., ge=1)


class WeekTasksRequest(CamelModel):
    goal: WeekTasksGoal
    milestone: Optional[WeekTasksMilestone] = None
    user: WeekTasksUser = Field(default_factory=WeekTasksUser)
    week_range: WeekRange
    total_weeks: Optional[int] = Field(default=None, ge=1)


class WeekTasksResponse(CamelModel):
    success: bool = True
    tasks: List[Dict[str, Any]]
    week_range: WeekRange
    usage: UsagePayload
