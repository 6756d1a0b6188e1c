from __future__ import annotations

from types import SimpleNamespace

import httpx
import openai
import pytest

from dreampath.core.errors import (
    ResponseParseError,
    UpstreamAuthError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)
from dreampath.services.completion_client import CompletionClient, CompletionSettings

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class DummyCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=message)],
            usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30),
        )


def _client(completions: DummyCompletions) -> CompletionClient:
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return CompletionClient(CompletionSettings(api_key="sk-test", model="gpt-4o-mini"), sdk_client=sdk)


def _rate_limit(code: str | None) -> openai.RateLimitError:
    body = {"code": code} if code else None
    return openai.RateLimitError("limited", response=httpx.Response(429, request=REQUEST), body=body)


def test_complete_returns_content_and_usage() -> None:
    completions = DummyCompletions(content='{"ok": true}')

    result = _client(completions).complete("system", "user", max_tokens=500)

    assert result.content == '{"ok": true}'
    assert (result.prompt_tokens, result.completion_tokens, result.total_tokens) == (10, 20, 30)
    assert completions.kwargs["model"] == "gpt-4o-mini"
    assert completions.kwargs["max_tokens"] == 500
    assert completions.kwargs["response_format"] == {"type": "json_object"}
    assert [message["role"] for message in completions.kwargs["messages"]] == ["system", "user"]


def test_empty_content_is_a_parse_error() -> None:
    with pytest.raises(ResponseParseError):
        _client(DummyCompletions(content="")).complete("system", "user", max_tokens=500)


def test_quota_code_maps_to_quota_error() -> None:
    with pytest.raises(UpstreamQuotaError):
        _client(DummyCompletions(error=_rate_limit("insufficient_quota"))).complete("s", "u", max_tokens=1)


def test_other_rate_limits_map_to_rate_limit_error() -> None:
    with pytest.raises(UpstreamRateLimitError):
        _client(DummyCompletions(error=_rate_limit(None))).complete("s", "u", max_tokens=1)


def test_authentication_failure_maps_to_auth_error() -> None:
    error = openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQUEST), body=None)

    with pytest.raises(UpstreamAuthError) as excinfo:
        _client(DummyCompletions(error=error)).complete("s", "u", max_tokens=1)

    assert excinfo.value.status_code == 500
    assert excinfo.value.code == "AUTH_ERROR"


def test_missing_api_key_fails_on_first_request() -> None:
    client = CompletionClient(CompletionSettings(api_key=None))

    with pytest.raises(UpstreamAuthError):
        client.complete("s", "u", max_tokens=1)
