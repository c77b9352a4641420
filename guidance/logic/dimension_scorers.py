"""
Dimension Scorers

One scoring function per matching dimension. Each returns a normalized score
between 0.0 and 1.0 plus the short factual phrases that explain it.
All logic is deterministic.
"""

from typing import List, Set

from .constants import (
    ACADEMIC_TIER_CREDIT,
    CONSTRAINT_EARN_INCOME,
    CONSTRAINT_LIMITED_BUDGET,
    CONSTRAINT_PHYSICAL,
    DEFAULT_INTEREST,
    DIMENSION_WEIGHTS,
    EARN_INCOME_MAX_YEARS,
    EARN_INCOME_PENALTY,
    EDUCATION_ADJACENT_CREDIT,
    EDUCATION_EXACT_CREDIT,
    EDUCATION_LABELS,
    EDUCATION_MISMATCH_CREDIT,
    EDUCATION_ORDER,
    ENVIRONMENT_MATCH_CREDIT,
    ENVIRONMENT_MISMATCH_CREDIT,
    ENVIRONMENT_MIXED_CREDIT,
    INTEREST_SATURATION,
    LIMITED_BUDGET_PENALTY,
    NARRATIVE_KEYWORDS,
    NEUTRAL_SCORE,
    PHYSICAL_LIMITATION_PENALTY,
    SUBJECT_LABELS,
    TRAIT_LABELS,
    EducationTier,
)
from .contracts import Career, ConstraintPenalty, DimensionScore, StudentProfile


def _dimension(name: str, score: float, factors: List[str]) -> DimensionScore:
    score = max(0.0, min(1.0, score))
    weight = DIMENSION_WEIGHTS[name]
    return DimensionScore(
        dimension=name,
        score=score,
        weight=weight,
        weighted_score=score * weight,
        factors=factors,
    )


def narrative_terms(profile: StudentProfile) -> Set[str]:
    """Interest labels implied by keywords in the free-text answers."""
    text = " ".join(
        part for part in (
            profile.interests_narrative,
            profile.experience_narrative,
            profile.inspiration_narrative,
        ) if part
    ).lower()
    if not text:
        return set()
    return {label for keyword, label in NARRATIVE_KEYWORDS.items() if keyword in text}


def score_interest_overlap(profile: StudentProfile, career: Career) -> DimensionScore:
    """
    Overlap between the student's interests and the career's keyword set.

    Normalized by the number of interests (capped), so one strong interest
    is not diluted by a long list of weaker ones.
    """
    stated = {i.lower() for i in profile.interests if i != DEFAULT_INTEREST}
    terms = stated | narrative_terms(profile)
    if not terms:
        return _dimension("interest_overlap", NEUTRAL_SCORE, [])

    keywords = set(career.keywords)
    hits = sorted(terms & keywords)
    denominator = min(len(terms), INTEREST_SATURATION)
    score = len(hits) / denominator

    factors = [f"Interest in {hit}" for hit in hits if hit in stated]
    if any(hit not in stated for hit in hits):
        factors.append("Echoes what you wrote about yourself")
    return _dimension("interest_overlap", score, factors)


def score_education_fit(profile: StudentProfile, career: Career) -> DimensionScore:
    """Exact tier match gets full credit, an adjacent tier partial credit."""
    goal = EDUCATION_ORDER.index(EducationTier(profile.education_goal))
    required = EDUCATION_ORDER.index(EducationTier(career.required_education))
    distance = abs(goal - required)

    label = EDUCATION_LABELS[career.required_education]
    if distance == 0:
        return _dimension("education_fit", EDUCATION_EXACT_CREDIT, [f"{label} matches your education goal"])
    if distance == 1:
        return _dimension("education_fit", EDUCATION_ADJACENT_CREDIT, [f"{label} is close to your education goal"])
    return _dimension("education_fit", EDUCATION_MISMATCH_CREDIT, [])


def score_trait_alignment(profile: StudentProfile, career: Career) -> DimensionScore:
    if not profile.traits:
        return _dimension("trait_alignment", NEUTRAL_SCORE, [])

    traits = set(profile.traits)
    hits = [tag for tag in career.trait_tags if tag in traits]
    score = len(hits) / min(len(traits), INTEREST_SATURATION)
    factors = [f"Uses your {TRAIT_LABELS.get(hit, hit)} strengths" for hit in hits]
    return _dimension("trait_alignment", score, factors)


def score_academic_alignment(profile: StudentProfile, career: Career) -> DimensionScore:
    rated = [
        subject for subject in career.subject_affinity
        if subject in profile.academic_performance
    ]
    if not rated:
        return _dimension("academic_alignment", NEUTRAL_SCORE, [])

    credits = [
        ACADEMIC_TIER_CREDIT.get(profile.academic_performance[subject], NEUTRAL_SCORE)
        for subject in rated
    ]
    factors = [
        f"Strong in {SUBJECT_LABELS.get(subject, subject)}"
        for subject in rated
        if profile.academic_performance[subject] in ("excellent", "good")
    ]
    return _dimension("academic_alignment", sum(credits) / len(credits), factors)


def score_environment_fit(profile: StudentProfile, career: Career) -> DimensionScore:
    preference = profile.work_environment_preference
    if preference == "no_preference":
        return _dimension("environment_fit", NEUTRAL_SCORE, [])
    if preference == career.work_environment:
        return _dimension("environment_fit", ENVIRONMENT_MATCH_CREDIT, [f"Matches your {preference} work preference"])
    if "mixed" in (preference, career.work_environment):
        return _dimension("environment_fit", ENVIRONMENT_MIXED_CREDIT, [])
    return _dimension("environment_fit", ENVIRONMENT_MISMATCH_CREDIT, [])


def score_constraints(profile: StudentProfile, career: Career) -> List[ConstraintPenalty]:
    """Penalties for hard constraints the career conflicts with."""
    penalties: List[ConstraintPenalty] = []
    constraints = set(profile.constraints)

    if CONSTRAINT_EARN_INCOME in constraints and career.time_to_entry_years > EARN_INCOME_MAX_YEARS:
        penalties.append(ConstraintPenalty(
            constraint=CONSTRAINT_EARN_INCOME,
            amount=EARN_INCOME_PENALTY,
            factor="Takes more than a year before you can earn",
        ))

    if CONSTRAINT_LIMITED_BUDGET in constraints and career.required_education in (
        EducationTier.BACHELOR, EducationTier.ADVANCED
    ):
        penalties.append(ConstraintPenalty(
            constraint=CONSTRAINT_LIMITED_BUDGET,
            amount=LIMITED_BUDGET_PENALTY,
            factor="Requires several years of paid schooling",
        ))

    if CONSTRAINT_PHYSICAL in constraints and career.physical_demand == "high":
        penalties.append(ConstraintPenalty(
            constraint=CONSTRAINT_PHYSICAL,
            amount=PHYSICAL_LIMITATION_PENALTY,
            factor="Physically demanding work",
        ))

    return penalties


SCORERS = (
    score_interest_overlap,
    score_education_fit,
    score_trait_alignment,
    score_academic_alignment,
    score_environment_fit,
)
