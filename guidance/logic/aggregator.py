"""
Score Aggregator

Combines the dimension scores into a single integer match score in [0, 100].
"""

from typing import Dict, Iterable, List

from .constants import MAX_MATCH_SCORE, MIN_MATCH_SCORE
from .contracts import Career, DimensionScore, ScoredCareer, StudentProfile
from .dimension_scorers import SCORERS, score_constraints


def clamp_score(value: float) -> int:
    return max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, int(round(value))))


def aggregate_scores(profile: StudentProfile, career: Career) -> ScoredCareer:
    """
    Run every dimension scorer and the constraint check for one career.

    Score = clamp(round(100 * (weighted sum - penalties)), 0, 100)
    """
    dimension_scores: Dict[str, DimensionScore] = {}
    factors: List[str] = []

    for scorer in SCORERS:
        score = scorer(profile, career)
        dimension_scores[score.dimension] = score
        factors.extend(score.factors)

    penalties = score_constraints(profile, career)

    weighted = sum(score.weighted_score for score in dimension_scores.values())
    penalty = sum(p.amount for p in penalties)

    return ScoredCareer(
        career=career,
        dimension_scores=dimension_scores,
        penalties=penalties,
        match_score=clamp_score(100 * (weighted - penalty)),
        factors=factors,
    )


def batch_aggregate(profile: StudentProfile, careers: Iterable[Career]) -> List[ScoredCareer]:
    """Score every career, preserving catalog order."""
    return [aggregate_scores(profile, career) for career in careers]
