"""Prompt compiler for weekly progress insights."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import List, Optional

from dreampath.api.schemas.analytics import AnalyticsInsightsRequest, FocusGoal, GoalProgress
from dreampath.core.errors import InputValidationError
from dreampath.services.plan_prompt import CompiledPrompt
from dreampath.services.timeline import SECONDS_PER_DAY, parse_request_datetime

INSIGHT_ICONS = [
    "trending-up",
    "trending-down",
    "time-outline",
    "alert-circle-outline",
    "checkmark-circle",
    "flame",
    "star",
    "bulb-outline",
]

SYSTEM_PROMPT = (
    "You are DreamPath AI Analytics Assistant, an expert life coach specializing in productivity analysis "
    "and personalized guidance.\n\n"
    "YOUR ROLE:\n"
    "- Analyze the user's goal progress and productivity data\n"
    "- Generate personalized insights and actionable suggestions\n"
    "- Create motivational weekly summaries\n\n"
    "YOUR STYLE:\n"
    "- Warm, encouraging, but honest\n"
    "- Data-driven observations that reference actual goals and numbers\n\n"
    "OUTPUT RULES:\n"
    "- Always return valid JSON (no markdown, no explanations outside JSON)\n"
    "- Weekly summary should be 2-3 sentences in paragraph form\n"
    "- Insights should feel personalized, not generic"
)


def _days_between(start: datetime, end: datetime) -> int:
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def _parse_optional(value: Optional[str], field_name: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_request_datetime(value, field_name)
    except InputValidationError:
        return None


def days_left(goal: GoalProgress, now: datetime) -> Optional[int]:
    target = _parse_optional(goal.target_date, "targetDate")
    return _days_between(now, target) if target else None


def is_behind_schedule(goal: GoalProgress, now: datetime) -> bool:
    """True when completion trails the share of the goal's window that has elapsed."""
    start = _parse_optional(goal.start_date, "startDate")
    target = _parse_optional(goal.target_date, "targetDate")
    if not start or not target:
        return False
    total_days = _days_between(start, target)
    if total_days <= 0:
        return goal.completion_percentage < 100
    elapsed = _days_between(start, now)
    expected = min(100.0, (elapsed / total_days) * 100)
    return goal.completion_percentage < expected


def _goal_line(goal: GoalProgress, now: datetime) -> str:
    remaining = days_left(goal, now)
    remaining_text = f"{remaining} days remaining" if remaining is not None else "no target date"
    return (
        f"- {goal.title} ({goal.category}): {goal.completion_percentage:g}% complete, "
        f"{goal.completed_tasks}/{goal.total_tasks} tasks, {remaining_text}, priority: {goal.priority}"
    )


def _focus_block(focus: Optional[FocusGoal]) -> str:
    if not focus:
        return "No specific focus goal identified (user may have completed all goals or has no active goals)"
    return (
        "PRIORITY FOCUS GOAL:\n"
        f"Goal: {focus.goal_name}\n"
        f"Current Progress: {round(focus.progress_percent)}%\n"
        f"Expected Progress: {round(focus.expected_progress)}%\n"
        f"Days Remaining: {focus.days_remaining}\n"
        f"Tasks Remaining: {focus.tasks_remaining}\n"
        f"Urgency: {focus.urgency_level.upper()}\n"
        f"Status: {focus.reason}"
    )


def build_analytics_prompts(request: AnalyticsInsightsRequest, now: datetime | None = None) -> CompiledPrompt:
    now = now or datetime.now(timezone.utc)
    stats = request.stats
    goals: List[GoalProgress] = request.goals
    goals_summary = "\n".join(_goal_line(goal, now) for goal in goals) if goals else "No active goals"
    high_priority = sum(1 for goal in goals if goal.priority == "HIGH")
    behind = sum(1 for goal in goals if is_behind_schedule(goal, now))
    weekly_change = f"{'+' if stats.weekly_change >= 0 else ''}{stats.weekly_change:g}"
    weekly_hours = round(stats.total_weekly_minutes / 60, 1)

    user_prompt = f"""Generate personalized analytics insights for {request.user_name or 'this user'}'s goal progress.

### CURRENT STATISTICS
Total Goals: {stats.total_goals}
Total Tasks: {stats.total_tasks}
Completed Tasks: {stats.completed_tasks}
Overall Progress: {stats.overall_progress:g}%
Current Streak: {stats.streak} days
Weekly Change: {weekly_change}% vs last week
Total Time This Week: {weekly_hours:g} hours ({stats.total_weekly_minutes} minutes)
Tasks Completed This Week: {stats.this_week_completed}

### GOALS BREAKDOWN
{goals_summary}

High Priority Goals: {high_priority}
Goals Behind Schedule: {behind}

### FOCUS
{_focus_block(request.focus_goal)}

### REQUIRED JSON OUTPUT
{{
    "weeklySummary": "A personalized 2-3 sentence paragraph summarizing the week's performance, achievements, and areas to focus on, citing actual numbers.",
    "insights": [
        {{
            "icon": "{'|'.join(INSIGHT_ICONS)}",
            "title": "Short, catchy insight title (max 4 words)",
            "description": "Specific observation based on their data (1-2 sentences)",
            "color": "success|primary|warning|error"
        }}
    ],
    "tips": [
        {{ "tip": "Actionable productivity tip relevant to their situation" }}
    ],
    "focusRecommendation": {{
        "title": "What they should focus on next week",
        "description": "Why this focus area matters and how to approach it",
        "actionItems": ["Specific action 1", "Specific action 2", "Specific action 3"]
    }},
    "motivationalMessage": "A warm, personalized message that references their specific achievements or goals."
}}

### GENERATION RULES
1. Generate exactly 3 insights based on their actual data
2. Generate exactly 4 productivity tips
3. Insights must use these icon names: {', '.join(INSIGHT_ICONS)}
4. Colors: success (positive), primary (neutral/info), warning (needs attention), error (critical)
5. Mention actual goal names, percentages, and numbers
6. If the streak is 0, encourage starting one; if above 0, celebrate it
7. If the weekly change is positive, acknowledge the improvement; otherwise offer encouragement to get back on track
8. If goals are behind schedule, address this in the insights
9. Base the focus recommendation on the priority focus goal when one is given

Return ONLY valid JSON. No markdown, no code blocks, no explanations outside the JSON structure."""
    return CompiledPrompt(system=SYSTEM_PROMPT, user=user_prompt)
