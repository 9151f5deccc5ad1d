import math

from model_router.models.domain import Candidate

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token count: about four characters per token. Not a real tokenizer."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_cost(candidate: Candidate, input_tokens: int, output_tokens: int) -> float:
    """Cost of an exchange at the candidate's per-1000-token rates."""
    return (
        input_tokens * candidate.pricing.input_rate / 1000
        + output_tokens * candidate.pricing.output_rate / 1000
    )
