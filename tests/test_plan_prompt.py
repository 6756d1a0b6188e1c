from __future__ import annotations

from datetime import datetime, timezone

from dreampath.api.schemas.plan import PlanGenerationRequest, SimplePlanRequest
from dreampath.services.day_grid import build_day_grid
from dreampath.services.plan_prompt import EXPERIENCE_STRATEGIES, build_plan_prompts
from dreampath.services.planning_policy import STRICT_PLAN_POLICY
from dreampath.services.timeline import compute_timeline

NOW = datetime(2026, 3, 2, 0, 0, tzinfo=timezone.utc)


def _guitar_request(**user_overrides) -> PlanGenerationRequest:
    user = {
        "timeAvailability": {"dailyAvailableHours": 1},
        "skills": {"experienceLevel": "beginner"},
    }
    user.update(user_overrides)
    return PlanGenerationRequest.model_validate(
        {
            "goal": {"title": "Learn guitar", "category": "PERSONAL", "targetDate": "2026-04-01"},
            "user": user,
        }
    )


def _compile(request: PlanGenerationRequest):
    timeline = compute_timeline(
        request.goal.target_date,
        request.user.time_availability.daily_available_hours,
        now=NOW,
    )
    slots = build_day_grid(1, timeline.weeks_until_target, timeline.daily_minutes, timeline.tasks_per_day)
    num_milestones = STRICT_PLAN_POLICY.milestone_count(timeline.weeks_until_target)
    return timeline, num_milestones, build_plan_prompts(request, timeline, slots, num_milestones)


def test_guitar_plan_prompt_carries_budget_and_grid() -> None:
    timeline, num_milestones, prompts = _compile(_guitar_request())

    assert (timeline.days_until_target, timeline.weeks_until_target, num_milestones) == (30, 5, 5)
    assert "User's daily time: 60 minutes" in prompts.user
    assert "Number of milestones: 5" in prompts.user
    grid_lines = [line for line in prompts.user.splitlines() if line.startswith("  - ") and "dayOfWeek:" in line]
    assert len(grid_lines) == 35
    assert "Monday (weekNumber: 1, dayOfWeek: 1)" in prompts.user
    assert "Sunday (weekNumber: 5, dayOfWeek: 7)" in prompts.user


def test_experience_strategy_and_occupation_hint() -> None:
    request = _guitar_request(
        profile={"occupation": "nurse"},
        skills={"experienceLevel": "advanced", "existingSkills": ["music theory"]},
    )

    _, _, prompts = _compile(request)

    assert EXPERIENCE_STRATEGIES["advanced"] in prompts.user
    assert EXPERIENCE_STRATEGIES["beginner"] not in prompts.user
    assert "works as a nurse" in prompts.user
    assert "music theory" in prompts.user


def test_missing_occupation_falls_back_to_flexible_schedule() -> None:
    _, _, prompts = _compile(_guitar_request())

    assert "No occupation specified" in prompts.user


def test_simple_request_lifts_into_full_shape() -> None:
    simple = SimplePlanRequest.model_validate(
        {"goal": "Run a 10k", "targetDate": "2026-05-01", "dailyHours": 0.5, "occupation": "pharmacist"}
    )

    request = simple.to_plan_request()

    assert request.goal.title == "Run a 10k"
    assert request.user.time_availability.daily_available_hours == 0.5
    assert request.user.profile.occupation == "pharmacist"
    assert request.user.skills.experience_level == "beginner"
