"""
Explainability Layer

Turns a CareerMatch's reasoning factors into a sentence. Only the factors
already on the match are used; scoring weights never appear.
"""

from typing import List

from .contracts import CareerMatch

FALLBACK_FACTOR = "general profile fit"


def explain_factors(score: int, factors: List[str]) -> str:
    cleaned = [f.strip().rstrip(".").lower() for f in factors if f and f.strip()]
    reason = ", ".join(cleaned) if cleaned else FALLBACK_FACTOR
    return f"{score}% match because {reason}."


def explain_match(match: CareerMatch) -> str:
    return explain_factors(match.match_score, match.reasoning_factors)


def explain_matches(matches: List[CareerMatch]) -> List[str]:
    return [explain_match(m) for m in matches]
