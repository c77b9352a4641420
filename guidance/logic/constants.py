"""
Guidance Engine Constants

Weights, lookup tables, and enums shared by the assessment and matching code.
Everything here is deterministic reference data and is never mutated at runtime.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class PathId(str, Enum):
    """Mutually exclusive assessment branches."""
    HANDS_ON = "hands_on"
    OTHER_WORK = "other_work"
    EXPLORING = "exploring"


class AssessmentState(str, Enum):
    NOT_STARTED = "not_started"
    BRANCHING_PENDING = "branching_pending"
    HANDS_ON_ACTIVE = "hands_on_active"
    OTHER_WORK_ACTIVE = "other_work_active"
    EXPLORING_ACTIVE = "exploring_active"
    COMPLETED = "completed"


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETED = "completed"


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    FREE_TEXT = "free_text"
    MATRIX = "matrix"
    RATING = "rating"


class Sector(str, Enum):
    HEALTHCARE = "healthcare"
    INFRASTRUCTURE = "infrastructure"
    TECHNOLOGY = "technology"
    CREATIVE = "creative"
    BUSINESS = "business"
    PUBLIC_SERVICE = "public-service"
    EDUCATION = "education"


class EducationTier(str, Enum):
    HIGH_SCHOOL = "high_school"
    CERTIFICATE = "certificate"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    ADVANCED = "advanced"


class DemandLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class IssueCode(str, Enum):
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    OUT_OF_RANGE_ANSWER = "OutOfRangeAnswer"
    INVALID_CONDITIONAL_ANSWER = "InvalidConditionalAnswer"
    UNEXPECTED_ANSWER = "UnexpectedAnswer"


class SkillImportance(str, Enum):
    CRITICAL = "Critical"
    IMPORTANT = "Important"
    HELPFUL = "Helpful"


class ActionPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ActionTimeline(str, Enum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short-term"
    LONG_TERM = "long-term"


class ActionCategory(str, Enum):
    EDUCATION = "education"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    NETWORKING = "networking"
    RESEARCH = "research"


class CourseRelevance(str, Enum):
    ESSENTIAL = "essential"
    RECOMMENDED = "recommended"
    HELPFUL = "helpful"


class PlanTiming(str, Enum):
    CURRENT_YEAR = "current_year"
    NEXT_YEAR = "next_year"
    LONG_TERM = "long_term"


# =============================================================================
# BRANCHING
# =============================================================================

BRANCHING_QUESTION_ID = "work_preference_main"

# Branching answer -> path. Includes legacy answer values still sent by older clients.
BRANCHING_PATH_TABLE: Dict[str, PathId] = {
    "hard_hat": PathId.HANDS_ON,
    "hands_on": PathId.HANDS_ON,
    "hands-on work": PathId.HANDS_ON,
    "path_a": PathId.HANDS_ON,
    "non_hard_hat": PathId.OTHER_WORK,
    "other_work": PathId.OTHER_WORK,
    "other work": PathId.OTHER_WORK,
    "decided": PathId.OTHER_WORK,
    "path_b": PathId.OTHER_WORK,
    "unable_to_decide": PathId.EXPLORING,
    "undecided": PathId.EXPLORING,
    "exploring": PathId.EXPLORING,
    "path_c": PathId.EXPLORING,
}

DEFAULT_PATH = PathId.EXPLORING

PATH_ACTIVE_STATE: Dict[PathId, AssessmentState] = {
    PathId.HANDS_ON: AssessmentState.HANDS_ON_ACTIVE,
    PathId.OTHER_WORK: AssessmentState.OTHER_WORK_ACTIVE,
    PathId.EXPLORING: AssessmentState.EXPLORING_ACTIVE,
}


# =============================================================================
# PROFILE DEFAULTS
# =============================================================================

DEFAULT_INTEREST = "General Exploration"
DEFAULT_EDUCATION_GOAL = EducationTier.CERTIFICATE
DEFAULT_WORK_ENVIRONMENT = "no_preference"
DEFAULT_ZIP_CODE = "00000"

# Grade answer -> school year; 13 means already out of high school
GRADE_YEARS: Dict[str, int] = {
    "9": 9,
    "10": 10,
    "11": 11,
    "12": 12,
    "graduated": 13,
}
DEFAULT_GRADE_YEAR = 11
FINAL_HIGH_SCHOOL_YEAR = 12

# 1-5 subject rating -> academic tier
SUBJECT_RATING_TIERS: Dict[int, str] = {
    5: "excellent",
    4: "good",
    3: "average",
    2: "struggling",
    1: "struggling",
}
SKILL_RATING_THRESHOLD = 4

# Answer value -> human readable interest label
CATEGORY_INTEREST_LABELS: Dict[str, str] = {
    "building_fixing": "Hands-on Work",
    "creating_designs": "Design",
    "technology": "Technology",
    "healthcare": "Healthcare",
    "education": "Education",
    "business": "Business",
    "creative": "Creative Arts",
    "public_safety": "Public Safety",
    "helping_others": "Helping Others",
    "data_analysis": "Technology",
    "research": "Science",
    "outdoors": "Hands-on Work",
}

UNSURE_ANSWERS = ("not_sure", "unsure", "other", "none", "")


# =============================================================================
# MATCHING WEIGHTS
# =============================================================================

DIMENSION_WEIGHTS: Dict[str, float] = {
    "interest_overlap": 0.40,
    "education_fit": 0.25,
    "trait_alignment": 0.15,
    "academic_alignment": 0.10,
    "environment_fit": 0.10,
}

# Neutral credit when the profile carries no signal for a dimension
NEUTRAL_SCORE = 0.5

EDUCATION_ORDER: List[EducationTier] = [
    EducationTier.HIGH_SCHOOL,
    EducationTier.CERTIFICATE,
    EducationTier.ASSOCIATE,
    EducationTier.BACHELOR,
    EducationTier.ADVANCED,
]
EDUCATION_EXACT_CREDIT = 1.0
EDUCATION_ADJACENT_CREDIT = 0.6
EDUCATION_MISMATCH_CREDIT = 0.0

# (profile preference, career environment) -> credit
ENVIRONMENT_MATCH_CREDIT = 1.0
ENVIRONMENT_MIXED_CREDIT = 0.7
ENVIRONMENT_MISMATCH_CREDIT = 0.3

# Interest hits needed for full interest credit
INTEREST_SATURATION = 2

ACADEMIC_TIER_CREDIT: Dict[str, float] = {
    "excellent": 1.0,
    "good": 0.8,
    "average": 0.5,
    "struggling": 0.2,
}

# Constraint penalties (subtracted from the weighted sum)
CONSTRAINT_EARN_INCOME = "earn_income_within_one_year"
CONSTRAINT_LIMITED_BUDGET = "limited_budget_for_school"
CONSTRAINT_PHYSICAL = "physical_limitations"

EARN_INCOME_PENALTY = 0.25
EARN_INCOME_MAX_YEARS = 1.0
LIMITED_BUDGET_PENALTY = 0.10
PHYSICAL_LIMITATION_PENALTY = 0.15

# Sector -> interest labels that map onto it
SECTOR_INTEREST_MAP: Dict[Sector, Tuple[str, ...]] = {
    Sector.HEALTHCARE: ("healthcare", "helping others", "science", "medicine"),
    Sector.INFRASTRUCTURE: ("hands-on work", "design", "building", "engineering", "outdoors"),
    Sector.TECHNOLOGY: ("technology", "computers", "problem solving", "science"),
    Sector.CREATIVE: ("creative arts", "design", "art", "music", "photography"),
    Sector.BUSINESS: ("business", "leadership", "money", "sales"),
    Sector.PUBLIC_SERVICE: ("public safety", "helping others", "community", "leadership"),
    Sector.EDUCATION: ("education", "helping others", "teaching", "community"),
}

# Free-text narrative keyword -> interest label, used by interest scoring only
NARRATIVE_KEYWORDS: Dict[str, str] = {
    "build": "building",
    "fix": "hands-on work",
    "repair": "hands-on work",
    "engine": "hands-on work",
    "construction": "building",
    "computer": "computers",
    "coding": "technology",
    "programming": "technology",
    "video game": "technology",
    "hospital": "healthcare",
    "nurse": "healthcare",
    "medical": "healthcare",
    "doctor": "healthcare",
    "helping people": "helping others",
    "volunteer": "community",
    "teach": "teaching",
    "tutor": "teaching",
    "draw": "art",
    "paint": "art",
    "design": "design",
    "music": "music",
    "photo": "photography",
    "business": "business",
    "sell": "sales",
    "money": "money",
    "rescue": "public safety",
    "firefight": "public safety",
    "police": "public safety",
    "science": "science",
    "outdoor": "outdoors",
}

# Human readable labels used in reasoning factors
EDUCATION_LABELS: Dict[str, str] = {
    "high_school": "No degree required",
    "certificate": "Certificate program",
    "associate": "Associate degree",
    "bachelor": "Bachelor's degree",
    "advanced": "Graduate degree",
}

TRAIT_LABELS: Dict[str, str] = {
    "hands_on": "hands-on",
    "problem_solver": "problem-solving",
    "independent": "independent",
    "detail_oriented": "detail-oriented",
    "analytical": "analytical",
    "creative": "creative",
    "helpful": "helping",
    "leader": "leadership",
    "communicator": "communication",
    "team_player": "teamwork",
}

SUBJECT_LABELS: Dict[str, str] = {
    "math": "math",
    "science": "science",
    "english": "English",
    "art": "art",
    "technology": "technology",
    "history": "history",
    "physical_ed": "physical education",
    "languages": "languages",
}

TIMELINE_BY_EDUCATION: Dict[str, str] = {
    "high_school": "0-1 years",
    "certificate": "6 months - 2 years",
    "associate": "2-3 years",
    "bachelor": "4-5 years",
    "advanced": "6-7 years",
}

MAX_MATCH_SCORE = 100
MIN_MATCH_SCORE = 0

EXPLORING_MATCH_COUNT = 3
EXPLICIT_SELECTION_FACTOR = "Named directly by you"
