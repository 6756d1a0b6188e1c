"""Typed views over the JSON objects the completion service returns."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CompletionPayload(BaseModel):
    """Checks only the fields the service relies on; every other key passes through."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class PlanMilestone(CompletionPayload):
    title: Optional[str] = None
    tasks: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_tasks(self) -> "PlanMilestone":
        if not self.tasks:
            raise ValueError(f'Milestone "{self.title}" has no tasks')
        return self


class GeneratedPlan(CompletionPayload):
    """Milestone plan with day-by-day tasks."""

    plan_summary: str = Field(..., min_length=1)
    milestones: List[PlanMilestone] = Field(..., min_length=1)

    def tasks(self) -> Iterator[Dict[str, Any]]:
        for milestone in self.milestones:
            yield from milestone.tasks


class WeekTasksPayload(CompletionPayload):
    tasks: List[Dict[str, Any]]


class InsightsPayload(CompletionPayload):
    weekly_summary: str = Field(..., min_length=1)
    insights: List[Dict[str, Any]]
    tips: List[Dict[str, Any]]
