"""
Output Assembler

Builds the merged academic plan and the final SubmissionResult.
"""

from typing import Dict, List, Optional

from .constants import DEFAULT_GRADE_YEAR, FINAL_HIGH_SCHOOL_YEAR, GRADE_YEARS, PlanTiming
from .contracts import (
    AcademicPlan,
    CareerMatch,
    PlannedCourse,
    Recommendation,
    StudentProfile,
    SubmissionResult,
    ValidationReport,
)
from .explainability import explain_matches

RELEVANCE_ORDER = {"essential": 0, "recommended": 1, "helpful": 2}

# relevance -> when to take it, for students with at least one more school year
TIMING_BY_RELEVANCE = {
    "essential": PlanTiming.CURRENT_YEAR,
    "recommended": PlanTiming.NEXT_YEAR,
    "helpful": PlanTiming.LONG_TERM,
}


def grade_year(grade: Optional[str]) -> int:
    """School year for a grade answer; unknown grades count as a junior."""
    if grade is None:
        return DEFAULT_GRADE_YEAR
    return GRADE_YEARS.get(str(grade).strip().lower(), DEFAULT_GRADE_YEAR)


def course_timing(relevance: str, year: int) -> PlanTiming:
    """
    When a course of the given relevance fits a student in `year`.

    Seniors have no next year left, so anything they should take in school
    moves into the current year. Graduates plan everything long term.
    """
    if year > FINAL_HIGH_SCHOOL_YEAR:
        return PlanTiming.LONG_TERM
    timing = TIMING_BY_RELEVANCE.get(relevance, PlanTiming.LONG_TERM)
    if year == FINAL_HIGH_SCHOOL_YEAR and timing == PlanTiming.NEXT_YEAR:
        return PlanTiming.CURRENT_YEAR
    return timing


def build_academic_plan(recommendations: List[Recommendation], grade: Optional[str] = None) -> AcademicPlan:
    """
    Merge course suggestions across careers.

    Each course keeps its strongest relevance and lists the careers it supports.
    Ordered by relevance, then first appearance, and split into current year,
    next year and long term buckets for the student's grade.
    """
    merged: Dict[str, PlannedCourse] = {}
    for recommendation in recommendations:
        for suggestion in recommendation.courses:
            key = suggestion.course.strip().lower()
            relevance = suggestion.relevance.lower()
            planned = merged.get(key)
            if planned is None:
                merged[key] = PlannedCourse(
                    course=suggestion.course,
                    relevance=relevance,
                    supports=[recommendation.career_title],
                )
                continue
            if RELEVANCE_ORDER.get(relevance, 3) < RELEVANCE_ORDER.get(planned.relevance, 3):
                planned.relevance = relevance
            if recommendation.career_title not in planned.supports:
                planned.supports.append(recommendation.career_title)

    order = {key: i for i, key in enumerate(merged)}
    ranked = sorted(
        merged.items(),
        key=lambda item: (RELEVANCE_ORDER.get(item[1].relevance, 3), order[item[0]]),
    )

    year = grade_year(grade)
    courses = [
        planned.model_copy(update={"timing": course_timing(planned.relevance, year).value})
        for _, planned in ranked
    ]
    return AcademicPlan(
        grade=grade,
        courses=courses,
        current_year=[c for c in courses if c.timing == PlanTiming.CURRENT_YEAR],
        next_year=[c for c in courses if c.timing == PlanTiming.NEXT_YEAR],
        long_term=[c for c in courses if c.timing == PlanTiming.LONG_TERM],
    )


def assemble_submission(
    profile: StudentProfile,
    validation: ValidationReport,
    matches: List[CareerMatch],
    recommendations: List[Recommendation],
    processing_time_ms: float,
    session_id: Optional[str] = None,
    warnings: Optional[List[str]] = None,
) -> SubmissionResult:
    return SubmissionResult(
        session_id=session_id,
        path=profile.path,
        profile=profile,
        validation=validation,
        matches=matches,
        recommendations=recommendations,
        academic_plan=build_academic_plan(recommendations, grade=profile.grade),
        explanations=explain_matches(matches),
        warnings=warnings or [],
        processing_time_ms=round(processing_time_ms, 2),
    )
