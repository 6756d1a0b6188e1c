"""Schemas for the analytics insights endpoint."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from dreampath.api.schemas.common import CamelModel, UsagePayload


class GoalProgress(CamelModel):
    id: Optional[str] = None
    title: str
    category: str = "OTHER"
    priority: str = "MEDIUM"
    status: Optional[str] = None
    start_date: Optional[str] = None
    target_date: Optional[str] = None
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_percentage: float = 0


class TaskProgress(CamelModel):
    id: Optional[str] = None
    goal_id: Optional[str] = None
    status: Optional[str] = None
    scheduled_date: Optional[str] = None
    completed_at: Optional[str] = None
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None


class ProgressStats(CamelModel):
    total_goals: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    overall_progress: float = 0
    streak: int = 0
    weekly_change: float = 0
    total_weekly_minutes: int = 0
    this_week_completed: int = 0


class FocusGoal(CamelModel):
    goal_name: str
    progress_percent: float
    expected_progress: float
    days_remaining: int
    tasks_remaining: int
    urgency_level: Literal["critical", "high", "medium", "low"]
    reason: str


class AnalyticsInsightsRequest(CamelModel):
    goals: List[GoalProgress] = Field(default_factory=list)
    tasks: List[TaskProgress] = Field(default_factory=list)
    stats: ProgressStats
    focus_goal: Optional[FocusGoal] = None
    user_name: Optional[str] = None


class AnalyticsInsightsResponse(CamelModel):
    success: bool = True
    data: Dict[str, Any]
    usage: UsagePayload
    generated_at: datetime
