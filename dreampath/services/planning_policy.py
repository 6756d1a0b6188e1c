"""Per-endpoint knobs for the shared prompt compiler and response validator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Type

from dreampath.core.errors import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)


@dataclass(frozen=True)
class PlanningPolicy:
    name: str
    max_tokens: int
    min_horizon_days: int = 7
    min_milestones: int = 3
    max_milestones: int = 8
    audit_coverage: bool = False
    surfaced_errors: Tuple[Type[UpstreamError], ...] = ()
    reported_as: Tuple[Tuple[Type[UpstreamError], Type[UpstreamError]], ...] = ()

    def milestone_count(self, weeks_until_target: int) -> int:
        """Clamp the number of milestones to the policy bounds."""
        return max(self.min_milestones, min(weeks_until_target, self.max_milestones))

    def surfaces(self, exc: Exception) -> bool:
        return isinstance(exc, self.surfaced_errors)

    def reported_error(self, exc: Exception) -> Exception:
        """Swap an upstream error for the one this endpoint reports in its place."""
        for source, target in self.reported_as:
            if isinstance(exc, source):
                return target()
        return exc


STRICT_PLAN_POLICY = PlanningPolicy(
    name="generate-plan",
    max_tokens=32000,
    audit_coverage=True,
    surfaced_errors=(UpstreamQuotaError, UpstreamRateLimitError),
)

SIMPLE_PLAN_POLICY = PlanningPolicy(
    name="generate-plan-simple",
    max_tokens=16000,
    surfaced_errors=(UpstreamQuotaError,),
)

WEEK_TASKS_POLICY = PlanningPolicy(
    name="generate-week-tasks",
    max_tokens=16000,
)

ANALYTICS_POLICY = PlanningPolicy(
    name="analytics-insights",
    max_tokens=2000,
    surfaced_errors=(UpstreamAuthError, UpstreamRateLimitError),
    reported_as=((UpstreamQuotaError, UpstreamRateLimitError),),
)
