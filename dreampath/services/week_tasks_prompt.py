"""Prompt compiler for batched week-by-week task generation."""
from __future__ import annotations

import math
from typing import List

from dreampath.api.schemas.week_tasks import WeekTasksRequest
from dreampath.services.day_grid import DaySlot, render_day_grid
from dreampath.services.plan_prompt import (
    EXPERIENCE_STRATEGIES,
    MAX_TASK_MINUTES,
    MIN_TASK_MINUTES,
    CompiledPrompt,
    format_hours,
    occupation_hint,
)

SYSTEM_PROMPT = (
    "You are DreamPath AI, generating specific daily tasks for a goal.\n\n"
    "OUTPUT RULES:\n"
    "- Return ONLY valid JSON\n"
    "- Every day must have at least 2 tasks\n"
    "- Task times must respect the user's daily available hours\n"
    "- Tasks should progress logically through the weeks\n"
    "- Include detailed descriptions (100+ words, no bullet points)\n"
    '- Every task MUST have a "tips" field'
)


def build_week_tasks_prompts(request: WeekTasksRequest, slots: List[DaySlot], daily_minutes: int) -> CompiledPrompt:
    goal = request.goal
    milestone = request.milestone
    user = request.user
    start_week = request.week_range.start_week
    end_week = request.week_range.end_week
    total_weeks = request.total_weeks or end_week
    weeks_in_batch = end_week - start_week + 1
    days_in_batch = weeks_in_batch * 7
    floor_80 = math.floor(daily_minutes * 0.8)

    context_lines = [
        f"Experience Level: {user.experience_level}",
        EXPERIENCE_STRATEGIES[user.experience_level],
        f"Daily Time Available: {daily_minutes} minutes ({format_hours(user.daily_available_hours)} hours)",
    ]
    if user.occupation:
        context_lines.append(f"Occupation: {user.occupation}")
    context_lines.append(occupation_hint(user.occupation))
    if user.challenges:
        context_lines.append(f"Challenges: {', '.join(user.challenges)}")
    context_block = "\n".join(context_lines)

    if start_week == 1:
        progression = "Week 1 should have easier setup/learning tasks"
    else:
        progression = f"Week {start_week} should build on previous weeks"

    user_prompt = f"""Generate daily tasks for weeks {start_week} to {end_week} of a {total_weeks}-week plan.

### GOAL
Title: {goal.title}
Description: {goal.description or 'Not provided'}
Category: {goal.category}

Current Milestone: {(milestone.title if milestone else None) or 'General progress'}
Milestone Description: {(milestone.description if milestone else None) or 'Continue working toward the goal'}

### USER CONTEXT
{context_block}

### REQUIRED DAYS TO COVER
{render_day_grid(slots)}

### REQUIREMENTS
- Generate tasks for {days_in_batch} days ({weeks_in_batch} weeks)
- MINIMUM {days_in_batch * 2} tasks total (at least 2 per day)
- Each day's tasks must total {floor_80}-{daily_minutes} minutes
- {progression}
- Task descriptions: 100+ words, no bullet points, mentor-style guidance
- Every task MUST include the "tips" field

### REQUIRED JSON OUTPUT
{{
    "tasks": [
        {{
            "title": "Task title (max 60 chars)",
            "description": "Detailed paragraph (100+ words): what to do, how, resources, outcome, mistakes to avoid",
            "estimatedMinutes": <{MIN_TASK_MINUTES}-{MAX_TASK_MINUTES}>,
            "priority": "HIGH|MEDIUM|LOW",
            "difficulty": "EASY|MEDIUM|HARD",
            "category": "LEARNING|ACTION|PLANNING|REVIEW|PRACTICE|NETWORKING",
            "dayOfWeek": <1-7>,
            "weekNumber": <{start_week}-{end_week}>,
            "tips": "Practical advice (REQUIRED)"
        }}
    ]
}}

### CRITICAL CHECKS
- Every day from Week {start_week} to Week {end_week} has at least 2 tasks
- Each task has weekNumber between {start_week} and {end_week}
- Each task has dayOfWeek between 1 and 7
- Daily task totals are {floor_80}-{daily_minutes} minutes
- All tasks have the "tips" field

Return ONLY valid JSON."""
    return CompiledPrompt(system=SYSTEM_PROMPT, user=user_prompt)
