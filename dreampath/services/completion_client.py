"""OpenAI chat-completion wrapper used by every generation endpoint."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import openai

from dreampath.core.config import get_settings
from dreampath.core.errors import (
    ResponseParseError,
    UpstreamAuthError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)
from dreampath.observability.metrics import log_metric
from dreampath.observability.tracing import trace

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODE = "insufficient_quota"


@dataclass(frozen=True)
class CompletionSettings:
    api_key: Optional[str]
    model: str = "gpt-4o-mini"
    temperature: float = 0.7


@dataclass(frozen=True)
class CompletionResult:
    content: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionClient:
    """Sends one system+user prompt pair and returns the raw text answer.

    The OpenAI SDK client is created on first use so the application can start
    without a key; requests then fail with UpstreamAuthError.
    """

    def __init__(self, config: CompletionSettings, sdk_client: Any = None) -> None:
        self.config = config
        self._sdk_client = sdk_client

    @property
    def model(self) -> str:
        return self.config.model

    def _client(self) -> Any:
        if self._sdk_client is None:
            if not self.config.api_key:
                raise UpstreamAuthError("OPENAI_API_KEY is not configured")
            self._sdk_client = openai.OpenAI(api_key=self.config.api_key)
        return self._sdk_client

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_tokens: int,
        request_id: str | None = None,
    ) -> CompletionResult:
        metadata = {
            "model": self.config.model,
            "max_tokens": max_tokens,
            "prompt_chars": len(user_prompt),
        }
        with trace("completion.create", metadata=metadata, request_id=request_id) as span:
            try:
                completion = self._client().chat.completions.create(
                    model=self.config.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    response_format={"type": "json_object"},
                    temperature=self.config.temperature,
                    max_tokens=max_tokens,
                )
            except openai.AuthenticationError as exc:
                raise UpstreamAuthError() from exc
            except openai.RateLimitError as exc:
                if getattr(exc, "code", None) == QUOTA_ERROR_CODE:
                    raise UpstreamQuotaError() from exc
                raise UpstreamRateLimitError() from exc

            content = completion.choices[0].message.content if completion.choices else None
            if not content:
                raise ResponseParseError("No response from completion service")

            usage = completion.usage
            result = CompletionResult(
                content=content,
                model=self.config.model,
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            )
            if span:
                span.update(
                    metadata={
                        **metadata,
                        "prompt_tokens": result.prompt_tokens,
                        "completion_tokens": result.completion_tokens,
                    }
                )

        logger.info(
            "Completion received: %d chars, %d prompt / %d completion tokens",
            len(content),
            result.prompt_tokens,
            result.completion_tokens,
        )
        log_metric("completion.tokens", result.total_tokens, {"model": result.model, "max_tokens": max_tokens})
        return result


@lru_cache
def get_completion_client() -> CompletionClient:
    """FastAPI dependency returning the process-wide completion client."""
    app_settings = get_settings()
    return CompletionClient(
        CompletionSettings(
            api_key=app_settings.openai_api_key,
            model=app_settings.openai_model,
            temperature=app_settings.openai_temperature,
        )
    )
