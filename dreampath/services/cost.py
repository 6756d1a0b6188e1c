"""Token cost estimate for gpt-4o-mini pricing."""
from __future__ import annotations

INPUT_COST_PER_MILLION = 0.15
OUTPUT_COST_PER_MILLION = 0.60


def estimate_cost(prompt_tokens: int, completion_tokens: int) -> str:
    input_cost = (prompt_tokens / 1_000_000) * INPUT_COST_PER_MILLION
    output_cost = (completion_tokens / 1_000_000) * OUTPUT_COST_PER_MILLION
    return f"${input_cost + output_cost:.4f}"
