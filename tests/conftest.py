from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from dreampath.main import app
from dreampath.services.completion_client import CompletionResult, get_completion_client


class FakeCompletionClient:
    """Stands in for the OpenAI-backed client; returns canned content or raises."""

    model = "fake-model"

    def __init__(self, content: str = "{}", error: Optional[Exception] = None) -> None:
        self.content = content
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system_prompt: str, user_prompt: str, *, max_tokens: int, request_id: str | None = None):
        self.calls.append(
            {
                "system": system_prompt,
                "user": user_prompt,
                "max_tokens": max_tokens,
                "request_id": request_id,
            }
        )
        if self.error is not None:
            raise self.error
        return CompletionResult(
            content=self.content,
            model=self.model,
            prompt_tokens=1200,
            completion_tokens=3400,
            total_tokens=4600,
        )


def build_plan(weeks: int, minutes_per_task: int = 30, tasks_per_slot: int = 2, skip: tuple = ()) -> Dict[str, Any]:
    tasks = [
        {
            "title": f"Week {week} day {day} task {index}",
            "description": "Practice session",
            "estimatedMinutes": minutes_per_task,
            "priority": "MEDIUM",
            "difficulty": "EASY",
            "category": "PRACTICE",
            "dayOfWeek": day,
            "weekNumber": week,
            "tips": "Keep it steady",
        }
        for week in range(1, weeks + 1)
        for day in range(1, 8)
        if (week, day) not in skip
        for index in range(tasks_per_slot)
    ]
    return {
        "planSummary": "A steady ramp toward the goal.",
        "goalTitle": "Goal",
        "goalDescription": "Done when the goal is met.",
        "difficultyScore": 5,
        "difficultyExplanation": "Moderate",
        "totalWeeks": weeks,
        "weeklyHoursRequired": 7,
        "successProbability": 0.8,
        "keySuccessFactors": ["consistency"],
        "milestones": [
            {
                "order": 1,
                "title": "Foundations",
                "description": "Build the base",
                "targetDate": "2026-12-01",
                "weekNumber": 1,
                "keyActivities": ["practice"],
                "tasks": tasks,
            }
        ],
        "risks": [],
        "resourceRequirements": {
            "timeInvestment": "7 hours/week",
            "financialInvestment": "none",
            "toolsNeeded": [],
            "skillsToDevelop": [],
        },
        "quickWins": [],
        "motivationalMessage": "You can do this.",
    }


@pytest.fixture()
def fake_completion():
    return FakeCompletionClient(content=json.dumps(build_plan(weeks=1)))


@pytest.fixture()
def client(fake_completion):
    app.dependency_overrides[get_completion_client] = lambda: fake_completion
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
