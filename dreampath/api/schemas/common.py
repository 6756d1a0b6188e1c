"""Shared schema helpers."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dreampath.services.completion_client import CompletionResult
from dreampath.services.cost import estimate_cost

ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
GoalCategory = Literal["CAREER", "HEALTH", "FINANCIAL", "EDUCATION", "PERSONAL", "RELATIONSHIP", "OTHER"]
GoalPriority = Literal["LOW", "MEDIUM", "HIGH"]


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while exposing snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UsagePayload(CamelModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_cost: str

    @classmethod
    def from_completion(cls, completion: CompletionResult) -> "UsagePayload":
        return cls(
            prompt_tokens=completion.prompt_tokens,
            completion_tokens=completion.completion_tokens,
            total_tokens=completion.total_tokens,
            estimated_cost=estimate_cost(completion.prompt_tokens, completion.completion_tokens),
        )


class ErrorPayload(CamelModel):
    success: bool = False
    error: str
    code: Optional[str] = None
