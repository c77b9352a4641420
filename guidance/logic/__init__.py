"""
Guidance Logic Module

Deterministic core: assessment state machine, profile builder, career
matching engine and explainability.
"""

from .constants import PathId, Sector, EducationTier, DemandLevel, AssessmentState
from .contracts import (
    Question,
    AssessmentSession,
    StudentProfile,
    Career,
    CareerMatch,
    Recommendation,
    AcademicPlan,
    ValidationReport,
    ProgressReport,
    SubmissionResult,
)
from .errors import (
    GuidanceError,
    AssessmentValidationError,
    InvalidTransitionError,
    UnknownPathError,
    SessionNotFoundError,
    CatalogLookupError,
    PersistenceError,
)
from .catalog import CareerCatalog, default_catalog
from .questions import questions_for_path
from .state_machine import determine_path, validate_responses, get_progress, AssessmentStateMachine
from .profile_builder import build_profile
from .engine import MatchingEngine
from .explainability import explain_match

__all__ = [
    # Main engine
    "MatchingEngine",
    "AssessmentStateMachine",

    # Operations
    "determine_path",
    "questions_for_path",
    "validate_responses",
    "get_progress",
    "build_profile",
    "explain_match",

    # Catalog
    "CareerCatalog",
    "default_catalog",

    # Contracts
    "Question",
    "AssessmentSession",
    "StudentProfile",
    "Career",
    "CareerMatch",
    "Recommendation",
    "AcademicPlan",
    "ValidationReport",
    "ProgressReport",
    "SubmissionResult",

    # Enums
    "PathId",
    "Sector",
    "EducationTier",
    "DemandLevel",
    "AssessmentState",

    # Errors
    "GuidanceError",
    "AssessmentValidationError",
    "InvalidTransitionError",
    "UnknownPathError",
    "SessionNotFoundError",
    "CatalogLookupError",
    "PersistenceError",
]
