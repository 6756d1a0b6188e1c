from dreampath.services.cost import estimate_cost


def test_zero_tokens_cost_nothing() -> None:
    assert estimate_cost(0, 0) == "$0.0000"


def test_prompt_tokens_rate() -> None:
    assert estimate_cost(1_000_000, 0) == "$0.1500"


def test_completion_tokens_rate() -> None:
    assert estimate_cost(0, 1_000_000) == "$0.6000"


def test_rates_add_up() -> None:
    assert estimate_cost(2_000_000, 1_000_000) == "$0.9000"
