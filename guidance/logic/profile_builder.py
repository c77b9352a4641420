"""
Profile Builder

Pure transform of raw answers + path into a StudentProfile.
Free-text answers are copied through untouched.
"""

from typing import Any, Dict, List, Mapping, Optional

from .constants import (
    CATEGORY_INTEREST_LABELS,
    DEFAULT_EDUCATION_GOAL,
    DEFAULT_INTEREST,
    DEFAULT_WORK_ENVIRONMENT,
    DEFAULT_ZIP_CODE,
    SKILL_RATING_THRESHOLD,
    SUBJECT_RATING_TIERS,
    UNSURE_ANSWERS,
    EducationTier,
    PathId,
)
from .contracts import StudentProfile
from .questions import SPECIFIC_CAREER_QUESTIONS
from .state_machine import coerce_int, applicable_responses, resolve_path

ENVIRONMENTS = ("indoor", "outdoor", "mixed", "no_preference")


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    out = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            out.append(item)
    return out


def _interests(answers: Mapping[str, Any], path: PathId) -> List[str]:
    selected: List[str] = []
    if path == PathId.HANDS_ON:
        selected.append("building_fixing")
        selected.append(answers.get("hard_hat_specific", ""))
    elif path == PathId.OTHER_WORK:
        selected.append(answers.get("non_hard_hat_specific", ""))
        selected.extend(_as_list(answers.get("other_work_interests")))
    else:
        selected.extend(_as_list(answers.get("interest_areas")))

    labels = [
        CATEGORY_INTEREST_LABELS[value]
        for value in selected
        if value and value in CATEGORY_INTEREST_LABELS
    ]
    return _dedupe(labels) or [DEFAULT_INTEREST]


def _academics(ratings: Any) -> Dict[str, str]:
    if not isinstance(ratings, dict):
        return {}
    tiers: Dict[str, str] = {}
    for subject, rating in ratings.items():
        number = coerce_int(rating)
        if number in SUBJECT_RATING_TIERS:
            tiers[subject] = SUBJECT_RATING_TIERS[number]
    return tiers


def _skills(ratings: Any) -> List[str]:
    if not isinstance(ratings, dict):
        return []
    return [
        subject for subject, rating in ratings.items()
        if (coerce_int(rating) or 0) >= SKILL_RATING_THRESHOLD
    ]


def _explicit_career(answers: Mapping[str, Any]) -> Optional[str]:
    for question_id in SPECIFIC_CAREER_QUESTIONS:
        value = answers.get(question_id)
        if isinstance(value, str) and value.strip().lower() not in UNSURE_ANSWERS:
            return value
    named = _text(answers.get("named_career"))
    if named and named.strip().lower() not in UNSURE_ANSWERS:
        return named.strip()
    return None


def _career_category(answers: Mapping[str, Any]) -> Optional[str]:
    for question_id in ("hard_hat_specific", "non_hard_hat_specific"):
        value = answers.get(question_id)
        if isinstance(value, str) and value not in UNSURE_ANSWERS:
            return value
    return None


def build_profile(responses: Mapping[str, Any], path: Any) -> StudentProfile:
    """
    Build a normalized profile from raw answers.

    Answers that are not applicable to the path are ignored. Missing optional
    answers fall back to neutral defaults so no downstream collection is empty.
    """
    path = resolve_path(path)
    answers = applicable_responses(responses, path)

    education = answers.get("education_commitment")
    education_values = [tier.value for tier in EducationTier]
    environment = answers.get("work_environment")
    ratings = answers.get("subject_strengths")

    grade = answers.get("grade")
    zip_code = answers.get("zip_code")

    return StudentProfile(
        path=path,
        interests=_interests(answers, path),
        skills=_skills(ratings),
        academic_performance=_academics(ratings),
        education_goal=education if education in education_values else DEFAULT_EDUCATION_GOAL,
        work_environment_preference=environment if environment in ENVIRONMENTS else DEFAULT_WORK_ENVIRONMENT,
        constraints=[c for c in _as_list(answers.get("career_constraints")) if c != "none"],
        traits=_as_list(answers.get("undecided_personal_traits")),
        zip_code=zip_code.strip() if isinstance(zip_code, str) and zip_code.strip() else DEFAULT_ZIP_CODE,
        grade=str(grade) if grade is not None else None,
        interests_narrative=_text(answers.get("undecided_interests_hobbies")),
        experience_narrative=_text(answers.get("undecided_work_experience")) or _text(answers.get("hands_on_experience")),
        inspiration_narrative=_text(answers.get("impact_inspiration")),
        explicit_career=_explicit_career(answers),
        career_category=_career_category(answers),
    )
