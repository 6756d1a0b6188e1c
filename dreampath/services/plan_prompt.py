"""Prompt compiler for full goal plans."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from dreampath.api.schemas.plan import PlanGenerationRequest
from dreampath.services.day_grid import DaySlot, render_day_grid
from dreampath.services.timeline import Timeline

MIN_TASK_MINUTES = 15
MAX_TASK_MINUTES = 90

SYSTEM_PROMPT = (
    "You are DreamPath AI, an expert life coach and strategic planner with 20+ years of experience "
    "helping people achieve ambitious goals.\n\n"
    "YOUR ROLE:\n"
    "- Analyze goals and create realistic, achievable action plans\n"
    "- Break down large goals into manageable milestones and daily tasks\n"
    "- Consider the user's unique circumstances (time, money, skills, constraints)\n"
    "- Be motivating but realistic; never overpromise\n\n"
    "YOUR STYLE:\n"
    "- Clear, actionable language\n"
    "- Supportive but honest\n"
    "- Practical over theoretical, specific over vague\n\n"
    "OUTPUT RULES:\n"
    "- Always return valid JSON (no markdown, no explanations outside JSON)\n"
    "- Include all required fields as specified in the schema\n"
    "- Use ISO 8601 date format (YYYY-MM-DD)\n"
    "- Task times must fit within the user's daily availability\n\n"
    "CONSTRAINTS TO RESPECT:\n"
    "- Never suggest more hours than the user's stated availability\n"
    "- Consider financial limitations in recommendations\n"
    "- Account for the user's current skill and experience level\n"
    "- Factor in known challenges and provide mitigation strategies"
)

EXPERIENCE_STRATEGIES = {
    "beginner": (
        "Start with fundamentals, include more learning tasks, and break complex activities into smaller steps. "
        "Tasks should be simple, well-explained, and confidence-building."
    ),
    "intermediate": (
        "Balance learning with practice, include moderate challenges, and build on existing knowledge. "
        "Tasks can assume basic understanding."
    ),
    "advanced": (
        "Focus on optimization and mastery, include stretch goals, and emphasize efficiency. "
        "Tasks should challenge and push boundaries."
    ),
}


@dataclass(frozen=True)
class CompiledPrompt:
    system: str
    user: str


def format_hours(hours: float) -> str:
    return f"{hours:g}"


def occupation_hint(occupation: str | None) -> str:
    if occupation:
        return (
            f"Consider that the user works as a {occupation}. Schedule demanding tasks for when they likely "
            "have more energy (weekends or evenings) and leverage transferable skills from their profession."
        )
    return "No occupation specified: assume a flexible schedule but respect the daily time limit."


def _challenges_block(request: PlanGenerationRequest) -> str:
    challenges = request.user.challenges
    if not challenges or not (challenges.selected or challenges.custom):
        return "No specific challenges mentioned"
    listed = ", ".join([*challenges.selected, *([challenges.custom] if challenges.custom else [])])
    return (
        f"Known Challenges: {listed}\n"
        "IMPORTANT: Each challenge must be addressed in at least one task's tips or description."
    )


def _skills_block(request: PlanGenerationRequest) -> str:
    skills = request.user.skills
    lines: List[str] = []
    lines.append(f"Existing Skills: {', '.join(skills.existing_skills)}" if skills.existing_skills else "No specific skills mentioned")
    if skills.learning_interests:
        lines.append(f"Learning Interests: {', '.join(skills.learning_interests)}")
    return "\n".join(lines)


def _budget_line(request: PlanGenerationRequest) -> str:
    finances = request.user.finances
    if finances and finances.monthly_budget:
        currency = finances.currency or "$"
        return f"Budget Constraint: Keep costs under {currency}{finances.monthly_budget:g}/month"
    return "Budget: Prefer free/low-cost resources"


def _user_context_block(request: PlanGenerationRequest) -> str:
    user = request.user
    profile = user.profile
    lines: List[str] = []
    if user.display_name:
        lines.append(f"Name: {user.display_name}")
    if profile and profile.age:
        lines.append(f"Age: {profile.age}")
    if profile and profile.occupation:
        lines.append(f"Occupation: {profile.occupation}")
    if profile and profile.education_level:
        lines.append(f"Education: {profile.education_level}")
    lines.append(occupation_hint(profile.occupation if profile else None))
    availability = user.time_availability
    if availability.preferred_time_slots:
        lines.append(f"Preferred Time Slots: {', '.join(availability.preferred_time_slots)}")
    if availability.busy_days:
        lines.append(f"Busy Days (keep these lighter): {', '.join(availability.busy_days)}")
    level = user.skills.experience_level
    lines.append("")
    lines.append(f"Experience Level: {level}")
    lines.append(EXPERIENCE_STRATEGIES[level])
    lines.append(_skills_block(request))
    lines.append("")
    lines.append(_challenges_block(request))
    lines.append("")
    lines.append(_budget_line(request))
    return "\n".join(lines)


def build_plan_prompts(
    request: PlanGenerationRequest,
    timeline: Timeline,
    slots: List[DaySlot],
    num_milestones: int,
) -> CompiledPrompt:
    """Compile the system persona and the day-by-day planning instructions."""
    goal = request.goal
    hours = format_hours(request.user.time_availability.daily_available_hours)
    level = request.user.skills.experience_level
    days = timeline.days_until_target
    weeks = timeline.weeks_until_target
    daily_minutes = timeline.daily_minutes
    per_day = timeline.tasks_per_day
    floor_80 = math.floor(daily_minutes * 0.8)
    weekly_hours_cap = format_hours(request.user.time_availability.daily_available_hours * 7)
    start_label = goal.start_date or timeline.start.date().isoformat()

    user_prompt = f"""You are creating a DAY-BY-DAY action plan. Your PRIMARY goal is to ensure EVERY SINGLE DAY has tasks that fill the user's available time.

### CRITICAL TIME REQUIREMENTS
- Total days in plan: {days} days
- Total weeks in plan: {weeks} weeks
- Number of milestones: {num_milestones}
- User's daily time: {daily_minutes} minutes ({hours} hours)
- MINIMUM tasks required: {days * 2} tasks (at least 2 per day)
- IDEAL tasks to generate: {days * per_day} tasks (~{per_day} per day)
- Each day's tasks MUST sum to {floor_80}-{daily_minutes} minutes

### GOAL INFORMATION
Title: {goal.title}
Description: {goal.description or 'No additional description provided'}
Category: {goal.category}
Priority: {goal.priority}
Start Date: {start_label}
Target Date: {goal.target_date}

### USER CONTEXT (use this to personalize tasks)
{_user_context_block(request)}

### MANDATORY DAY-BY-DAY COVERAGE
You MUST create tasks for EVERY day listed below. No exceptions.
{render_day_grid(slots)}

### REQUIRED JSON OUTPUT SCHEMA
{{
    "planSummary": "2-3 sentence strategic overview",
    "goalTitle": "Refined, action-oriented title",
    "goalDescription": "Clear description of success",
    "difficultyScore": <1-10>,
    "difficultyExplanation": "Why this score for this user",
    "totalWeeks": {weeks},
    "weeklyHoursRequired": <max {weekly_hours_cap}>,
    "successProbability": <0.5-0.95>,
    "keySuccessFactors": ["factor1", "factor2", "factor3"],
    "milestones": [
        {{
            "order": 1,
            "title": "Milestone title",
            "description": "What will be accomplished",
            "targetDate": "YYYY-MM-DD",
            "weekNumber": 1,
            "keyActivities": ["activity1", "activity2"],
            "tasks": [
                {{
                    "title": "Task title (max 60 chars)",
                    "description": "Detailed paragraph (100+ words): what to do, how, resources, outcome, mistakes to avoid",
                    "estimatedMinutes": <{MIN_TASK_MINUTES}-{MAX_TASK_MINUTES}>,
                    "priority": "HIGH|MEDIUM|LOW",
                    "difficulty": "EASY|MEDIUM|HARD",
                    "category": "LEARNING|ACTION|PLANNING|REVIEW|PRACTICE|NETWORKING",
                    "dayOfWeek": <1-7>,
                    "weekNumber": <1-{weeks}>,
                    "tips": "Practical advice (REQUIRED)"
                }}
            ]
        }}
    ],
    "risks": [{{"risk": "...", "likelihood": "LOW|MEDIUM|HIGH", "mitigation": "..."}}],
    "resourceRequirements": {{
        "timeInvestment": "X hours/week",
        "financialInvestment": "...",
        "toolsNeeded": [],
        "skillsToDevelop": []
    }},
    "quickWins": ["Quick win 1", "Quick win 2"],
    "motivationalMessage": "Personalized encouragement"
}}

### STRICT RULES
RULE 1: DAILY TASK MINIMUM
- EVERY day (Week 1 Day 1 through Week {weeks} Day 7) MUST have tasks
- Each day MUST have AT LEAST 2 tasks
- Exception: a single task is allowed ONLY if it is {floor_80}+ minutes (fills 80%+ of daily time)

RULE 2: TIME ALIGNMENT
- User has exactly {daily_minutes} minutes per day; respect this
- Sum of task durations per day: {floor_80}-{daily_minutes} minutes
- Individual task duration: {MIN_TASK_MINUTES}-{MAX_TASK_MINUTES} minutes
- Never exceed the user's daily time allocation

RULE 3: REALISTIC PROGRESSION
- Week 1: setup, basics, and quick wins (easier tasks)
- Middle weeks: build momentum with practice and action tasks
- Final week(s): completion, polish, and review
- Difficulty should match the user's "{level}" level
- Spread the work across exactly {num_milestones} milestones in order

RULE 4: TASK VARIETY
- Mix categories each day: LEARNING, ACTION, PRACTICE, REVIEW
- Do not repeat the same task title
- Progress logically (no advanced tasks before the basics)

RULE 5: QUALITY DESCRIPTIONS
Each task description must be a detailed paragraph (100+ words) covering what to do, how to do it,
resources to use, success criteria, and common mistakes to avoid.
FORBIDDEN in descriptions: numbered steps, bullet points or lists, vague phrases like "learn the basics".

### EXAMPLE OF CORRECT DAILY DISTRIBUTION
Day example ({daily_minutes} min available):
- Task 1: {math.floor(daily_minutes * 0.4)} minutes
- Task 2: {math.floor(daily_minutes * 0.35)} minutes
- Task 3: {math.floor(daily_minutes * 0.25)} minutes
OR, for one high-difficulty task:
- Task 1: {math.floor(daily_minutes * 0.85)} minutes (single intensive task)

### FINAL CHECKLIST BEFORE RESPONDING
- Did I create tasks for ALL {days} days?
- Does EVERY day have at least 2 tasks (or 1 task of {floor_80}+ min)?
- Do daily task totals equal {floor_80}-{daily_minutes} minutes?
- Are tasks appropriate for the "{level}" level?
- Did I include the required "tips" field on every task?
- Are week 1 tasks easier than later weeks?

Return ONLY valid JSON. No markdown, no explanations."""
    return CompiledPrompt(system=SYSTEM_PROMPT, user=user_prompt)
