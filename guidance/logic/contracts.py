"""
Data Contracts for the Guidance Engine

Pydantic models for questions, sessions, profiles, the career catalog and
everything the matching and recommendation pipeline hands back to callers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .constants import (
    ActionCategory,
    ActionPriority,
    ActionTimeline,
    AssessmentState,
    CourseRelevance,
    DemandLevel,
    EducationTier,
    IssueCode,
    PathId,
    PlanTiming,
    QuestionType,
    Sector,
    SessionStatus,
    SkillImportance,
)


# =============================================================================
# QUESTIONNAIRE
# =============================================================================

class QuestionOption(BaseModel):
    value: str
    label: str

    class Config:
        frozen = True


class ConditionalTrigger(BaseModel):
    """Question is only shown when `parent_id` was answered with `parent_value`."""
    parent_id: str
    parent_value: str

    class Config:
        frozen = True


class Question(BaseModel):
    id: str
    text: str
    type: QuestionType
    options: Tuple[QuestionOption, ...] = ()
    trigger: Optional[ConditionalTrigger] = None
    required: bool = False
    branching: bool = False

    # multi_choice
    min_selections: Optional[int] = None
    max_selections: Optional[int] = None

    # free_text
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None

    # matrix / rating
    subjects: Tuple[str, ...] = ()
    scale_min: int = 1
    scale_max: int = 5

    class Config:
        frozen = True
        use_enum_values = True

    def option_values(self) -> List[str]:
        return [opt.value for opt in self.options]


# =============================================================================
# SESSIONS
# =============================================================================

class AssessmentSession(BaseModel):
    """One student's run through the questionnaire."""
    session_id: str
    status: SessionStatus = SessionStatus.NOT_STARTED
    state: AssessmentState = AssessmentState.NOT_STARTED
    path: Optional[PathId] = None
    responses: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    class Config:
        use_enum_values = True


# =============================================================================
# VALIDATION / PROGRESS
# =============================================================================

class ValidationIssue(BaseModel):
    code: IssueCode
    question_id: str
    message: str
    blocking: bool

    class Config:
        use_enum_values = True


class ValidationReport(BaseModel):
    is_valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)


class ProgressReport(BaseModel):
    percent: int = Field(ge=0, le=100)
    next_question_id: Optional[str] = None
    answered_required: int = 0
    total_required: int = 0


# =============================================================================
# PROFILE
# =============================================================================

class StudentProfile(BaseModel):
    """
    Normalized view of a student's answers.
    Derived on every submission and never persisted.
    """
    path: PathId = PathId.EXPLORING
    interests: List[str] = Field(default_factory=lambda: ["General Exploration"], min_length=1)
    skills: List[str] = Field(default_factory=list)
    academic_performance: Dict[str, str] = Field(default_factory=dict)  # subject -> tier
    education_goal: EducationTier = EducationTier.CERTIFICATE
    work_environment_preference: str = "no_preference"  # indoor/outdoor/mixed/no_preference
    constraints: List[str] = Field(default_factory=list)
    traits: List[str] = Field(default_factory=list)
    zip_code: str = "00000"
    grade: Optional[str] = None

    # Narratives, kept verbatim
    interests_narrative: Optional[str] = None
    experience_narrative: Optional[str] = None
    inspiration_narrative: Optional[str] = None

    # Career the student named directly, if any (id or title)
    explicit_career: Optional[str] = None
    career_category: Optional[str] = None

    class Config:
        use_enum_values = True


# =============================================================================
# CATALOG
# =============================================================================

class Career(BaseModel):
    id: str
    title: str
    sector: Sector
    description: str = ""
    required_education: EducationTier
    average_salary: int = Field(ge=0)
    certifications: Tuple[str, ...] = ()
    growth_outlook: str = ""

    # Matching metadata
    keywords: Tuple[str, ...] = ()
    trait_tags: Tuple[str, ...] = ()
    subject_affinity: Tuple[str, ...] = ()
    work_environment: str = "indoor"  # indoor/outdoor/mixed
    time_to_entry_years: float = 0.0
    physical_demand: str = "low"  # low/medium/high

    class Config:
        frozen = True
        use_enum_values = True


class LaborMarketEstimate(BaseModel):
    career_id: str
    demand: DemandLevel = DemandLevel.UNKNOWN
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None

    class Config:
        use_enum_values = True


# =============================================================================
# SCORING
# =============================================================================

class DimensionScore(BaseModel):
    """Individual sub-score with the factual tokens that produced it."""
    dimension: str
    score: float = Field(ge=0.0, le=1.0)
    weight: float = Field(ge=0.0, le=1.0)
    weighted_score: float = Field(ge=0.0, le=1.0)
    factors: List[str] = Field(default_factory=list)


class ConstraintPenalty(BaseModel):
    constraint: str
    amount: float = Field(ge=0.0, le=1.0)
    factor: str


class ScoredCareer(BaseModel):
    """Internal scoring result, before ranking and overrides."""
    career: Career
    dimension_scores: Dict[str, DimensionScore] = Field(default_factory=dict)
    penalties: List[ConstraintPenalty] = Field(default_factory=list)
    match_score: int = Field(ge=0, le=100)
    factors: List[str] = Field(default_factory=list)


class CareerMatch(BaseModel):
    career_id: str
    career: Career
    match_score: int = Field(ge=0, le=100)
    reasoning_factors: List[str] = Field(default_factory=list)
    local_demand: DemandLevel = DemandLevel.UNKNOWN
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    explicit_selection: bool = False
    rank: int = 0

    class Config:
        use_enum_values = True


# =============================================================================
# RECOMMENDATIONS
# =============================================================================

class SkillGap(BaseModel):
    skill: str = Field(min_length=1)
    importance: SkillImportance
    how_to_acquire: str = Field(min_length=1)

    class Config:
        use_enum_values = True
        str_strip_whitespace = True


class ActionItem(BaseModel):
    priority: ActionPriority
    timeline: ActionTimeline
    category: ActionCategory
    description: str = Field(min_length=1)

    class Config:
        use_enum_values = True
        str_strip_whitespace = True


class CourseSuggestion(BaseModel):
    course: str = Field(min_length=1)
    relevance: CourseRelevance
    reason: str = Field(min_length=1)

    class Config:
        use_enum_values = True
        str_strip_whitespace = True


class Recommendation(BaseModel):
    career_id: str
    career_title: str
    sector: Sector
    pathway_steps: List[str] = Field(min_length=3, max_length=6)
    timeline: str
    skill_gaps: List[SkillGap] = Field(min_length=2, max_length=5)
    action_items: List[ActionItem] = Field(min_length=2, max_length=6)
    courses: List[CourseSuggestion] = Field(default_factory=list)
    source: str = "fallback"  # generative / fallback

    class Config:
        use_enum_values = True


class PlannedCourse(BaseModel):
    course: str
    relevance: CourseRelevance
    timing: PlanTiming = PlanTiming.CURRENT_YEAR
    supports: List[str] = Field(default_factory=list)

    class Config:
        use_enum_values = True


class AcademicPlan(BaseModel):
    """
    Courses merged across the recommended careers.

    `courses` holds every course once; the three year buckets split the same
    courses by when the student should take them, based on their grade.
    """
    grade: Optional[str] = None
    courses: List[PlannedCourse] = Field(default_factory=list)
    current_year: List[PlannedCourse] = Field(default_factory=list)
    next_year: List[PlannedCourse] = Field(default_factory=list)
    long_term: List[PlannedCourse] = Field(default_factory=list)


# =============================================================================
# SUBMISSION OUTPUT
# =============================================================================

class SubmissionResult(BaseModel):
    session_id: Optional[str] = None
    path: PathId
    profile: StudentProfile
    validation: ValidationReport
    matches: List[CareerMatch] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    academic_plan: AcademicPlan = Field(default_factory=AcademicPlan)
    explanations: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    engine_version: str = "1.0.0"

    class Config:
        use_enum_values = True
