from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import openai
from conftest import FakeCompletionClient

from dreampath.api.schemas.analytics import GoalProgress
from dreampath.core.errors import UpstreamAuthError, UpstreamRateLimitError
from dreampath.main import app
from dreampath.services.analytics_prompt import days_left, is_behind_schedule
from dreampath.services.completion_client import CompletionClient, CompletionSettings, get_completion_client

INSIGHTS = {
    "weeklySummary": "You completed 12 tasks this week and kept a 5 day streak.",
    "insights": [
        {"icon": "flame", "title": "Streak on fire", "description": "Five days in a row.", "color": "success"}
    ],
    "tips": [{"tip": "Batch short tasks together."}],
    "focusRecommendation": {"title": "Guitar", "description": "Catch up.", "actionItems": ["Practice daily"]},
    "motivationalMessage": "Keep going!",
}


def _iso(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def _payload() -> dict:
    return {
        "goals": [
            {
                "title": "Learn guitar",
                "category": "PERSONAL",
                "priority": "HIGH",
                "startDate": _iso(-30),
                "targetDate": _iso(30),
                "totalTasks": 40,
                "completedTasks": 4,
                "completionPercentage": 10,
            },
            {
                "title": "Read 12 books",
                "category": "EDUCATION",
                "startDate": _iso(-30),
                "targetDate": _iso(30),
                "totalTasks": 12,
                "completedTasks": 11,
                "completionPercentage": 90,
            },
        ],
        "stats": {
            "totalGoals": 2,
            "totalTasks": 52,
            "completedTasks": 15,
            "overallProgress": 29,
            "streak": 5,
            "weeklyChange": 12,
            "totalWeeklyMinutes": 300,
            "thisWeekCompleted": 12,
        },
        "userName": "Sam",
    }


def _use(fake: FakeCompletionClient) -> FakeCompletionClient:
    app.dependency_overrides[get_completion_client] = lambda: fake
    return fake


def test_analytics_insights_success(client) -> None:
    fake = _use(FakeCompletionClient(content=f"```json\n{json.dumps(INSIGHTS)}\n```"))

    response = client.post("/api/analytics-insights", json=_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == INSIGHTS
    assert body["usage"]["estimatedCost"] == "$0.0022"
    assert "generatedAt" in body

    prompt = fake.calls[0]["user"]
    assert "Sam's goal progress" in prompt
    assert "High Priority Goals: 1" in prompt
    assert "Goals Behind Schedule: 1" in prompt
    assert "Weekly Change: +12% vs last week" in prompt
    assert "Total Time This Week: 5 hours (300 minutes)" in prompt
    assert fake.calls[0]["max_tokens"] == 2000


def test_missing_stats_is_rejected(client, fake_completion) -> None:
    payload = _payload()
    del payload["stats"]

    response = client.post("/api/analytics-insights", json=payload)

    assert response.status_code == 400
    assert "stats" in response.json()["error"]
    assert fake_completion.calls == []


def test_auth_failure_is_reported(client) -> None:
    _use(FakeCompletionClient(error=UpstreamAuthError()))

    response = client.post("/api/analytics-insights", json=_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "API authentication failed", "code": "AUTH_ERROR"}


def test_rate_limit_is_reported(client) -> None:
    _use(FakeCompletionClient(error=UpstreamRateLimitError()))

    response = client.post("/api/analytics-insights", json=_payload())

    assert response.status_code == 429
    assert response.json()["code"] == "RATE_LIMITED"


def test_exhausted_quota_is_reported_as_rate_limit(client) -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    error = openai.RateLimitError(
        "quota", response=httpx.Response(429, request=request), body={"code": "insufficient_quota"}
    )

    def _raise(**kwargs):
        raise error

    sdk = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=_raise)))
    app.dependency_overrides[get_completion_client] = lambda: CompletionClient(
        CompletionSettings(api_key="sk-test"), sdk_client=sdk
    )

    response = client.post("/api/analytics-insights", json={"stats": {}})

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "error": "Too many requests. Please wait a moment and try again.",
        "code": "RATE_LIMITED",
    }


def test_incomplete_insights_fail(client) -> None:
    _use(FakeCompletionClient(content=json.dumps({"weeklySummary": "Short week."})))

    response = client.post("/api/analytics-insights", json=_payload())

    assert response.status_code == 500


def test_schedule_helpers() -> None:
    now = datetime(2026, 6, 1, tzinfo=timezone.utc)
    goal = GoalProgress(
        title="Learn guitar",
        start_date="2026-05-01T00:00:00+00:00",
        target_date="2026-07-01T00:00:00+00:00",
        completion_percentage=40,
    )

    assert days_left(goal, now) == 30
    assert is_behind_schedule(goal, now)
    assert not is_behind_schedule(goal.model_copy(update={"completion_percentage": 60}), now)
    assert not is_behind_schedule(GoalProgress(title="Open-ended"), now)
