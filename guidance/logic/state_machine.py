"""
Assessment State Machine

not_started -> branching_pending -> {hands_on|other_work|exploring}_active -> completed

Path selection is a fixed table lookup on the branching answer. Validation and
progress are computed the same way for every path from that path's question table.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import (
    BRANCHING_PATH_TABLE,
    BRANCHING_QUESTION_ID,
    DEFAULT_PATH,
    PATH_ACTIVE_STATE,
    AssessmentState,
    IssueCode,
    PathId,
    QuestionType,
    SessionStatus,
)
from .contracts import (
    AssessmentSession,
    ProgressReport,
    Question,
    ValidationIssue,
    ValidationReport,
)
from .errors import AssessmentValidationError, InvalidTransitionError, UnknownPathError
from .questions import get_question, questions_for_path

logger = logging.getLogger(__name__)


# =============================================================================
# PATH SELECTION
# =============================================================================

def determine_path(branching_answer: Any) -> PathId:
    """
    Map a branching answer to its path id.

    Total and pure: unrecognized or empty answers map to the exploring path.
    """
    if isinstance(branching_answer, PathId):
        return branching_answer
    if branching_answer is None:
        return DEFAULT_PATH
    key = str(branching_answer).strip().lower()
    return BRANCHING_PATH_TABLE.get(key, DEFAULT_PATH)


def is_known_branching_answer(branching_answer: Any) -> bool:
    """True when the answer is one of the recognized branching values."""
    if isinstance(branching_answer, PathId):
        return True
    return str(branching_answer).strip().lower() in BRANCHING_PATH_TABLE


def resolve_path(path: Any) -> PathId:
    """Coerce a caller supplied path id, rejecting unknown values."""
    if isinstance(path, PathId):
        return path
    try:
        return PathId(str(path).strip().lower())
    except ValueError:
        raise UnknownPathError(f"Unknown path: {path}")


# =============================================================================
# ANSWER CHECKS
# =============================================================================

def _is_answered(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def _trigger_met(question: Question, responses: Mapping[str, Any]) -> bool:
    if question.trigger is None:
        return True
    parent_value = responses.get(question.trigger.parent_id)
    if isinstance(parent_value, (list, tuple)):
        return question.trigger.parent_value in parent_value
    return parent_value == question.trigger.parent_value


def coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _check_answer(question: Question, value: Any) -> Optional[str]:
    """Return a problem description when an answered value is out of range."""
    qtype = question.type

    if qtype == QuestionType.SINGLE_CHOICE:
        if not isinstance(value, str) or value not in question.option_values():
            return f"'{value}' is not a valid option"
        return None

    if qtype == QuestionType.MULTI_CHOICE:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return "Expected a list of selections"
        allowed = question.option_values()
        invalid = [v for v in value if v not in allowed]
        if invalid:
            return f"Invalid selections: {', '.join(str(v) for v in invalid)}"
        if question.min_selections is not None and len(value) < question.min_selections:
            return f"Select at least {question.min_selections}"
        if question.max_selections is not None and len(value) > question.max_selections:
            return f"Select no more than {question.max_selections}"
        return None

    if qtype == QuestionType.FREE_TEXT:
        if not isinstance(value, str):
            return "Expected text"
        text = value.strip()
        if question.min_length is not None and len(text) < question.min_length:
            return f"Answer must be at least {question.min_length} characters"
        if question.max_length is not None and len(text) > question.max_length:
            return f"Answer must be at most {question.max_length} characters"
        if question.pattern and not re.fullmatch(question.pattern, text):
            return "Answer is not in the expected format"
        return None

    if qtype == QuestionType.MATRIX:
        if not isinstance(value, dict):
            return "Expected a rating for each subject"
        for subject, rating in value.items():
            if subject not in question.subjects:
                return f"Unknown subject: {subject}"
            number = coerce_int(rating)
            if number is None or not question.scale_min <= number <= question.scale_max:
                return f"Rating for {subject} must be between {question.scale_min} and {question.scale_max}"
        return None

    if qtype == QuestionType.RATING:
        number = coerce_int(value)
        if number is None or not question.scale_min <= number <= question.scale_max:
            return f"Rating must be between {question.scale_min} and {question.scale_max}"
        return None

    return None


# =============================================================================
# VALIDATION / PROGRESS
# =============================================================================

def validate_responses(responses: Mapping[str, Any], path: Any) -> ValidationReport:
    """
    Validate a response set against one path's questions.

    MissingRequiredField and OutOfRangeAnswer block completion.
    Answers to questions that are not shown (unmet trigger, other path)
    only produce warnings.
    """
    path = resolve_path(path)
    questions = questions_for_path(path)
    on_path = {q.id for q in questions}
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    for question in questions:
        value = responses.get(question.id)
        answered = _is_answered(value)

        if not _trigger_met(question, responses):
            if answered:
                warnings.append(ValidationIssue(
                    code=IssueCode.INVALID_CONDITIONAL_ANSWER,
                    question_id=question.id,
                    message="Answer ignored because its follow-up condition was not met",
                    blocking=False,
                ))
            continue

        if not answered:
            if question.required:
                errors.append(ValidationIssue(
                    code=IssueCode.MISSING_REQUIRED_FIELD,
                    question_id=question.id,
                    message=f"'{question.text}' is required",
                    blocking=True,
                ))
            continue

        problem = _check_answer(question, value)
        if problem:
            errors.append(ValidationIssue(
                code=IssueCode.OUT_OF_RANGE_ANSWER,
                question_id=question.id,
                message=problem,
                blocking=True,
            ))
        elif question.branching and determine_path(value) != path:
            errors.append(ValidationIssue(
                code=IssueCode.OUT_OF_RANGE_ANSWER,
                question_id=question.id,
                message=f"Answer leads to a different path than '{path.value}'",
                blocking=True,
            ))

    for question_id, value in responses.items():
        if question_id in on_path or not _is_answered(value):
            continue
        if get_question(question_id) is not None:
            warnings.append(ValidationIssue(
                code=IssueCode.INVALID_CONDITIONAL_ANSWER,
                question_id=question_id,
                message=f"Question is not part of the '{path.value}' path",
                blocking=False,
            ))
        else:
            warnings.append(ValidationIssue(
                code=IssueCode.UNEXPECTED_ANSWER,
                question_id=question_id,
                message="Unknown question",
                blocking=False,
            ))

    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def applicable_responses(responses: Mapping[str, Any], path: Any) -> Dict[str, Any]:
    """Answers that count for the path; everything that only raised a warning is dropped."""
    path = resolve_path(path)
    kept: Dict[str, Any] = {}
    for question in questions_for_path(path):
        if question.id not in responses or not _trigger_met(question, responses):
            continue
        value = responses[question.id]
        if _is_answered(value):
            kept[question.id] = value
    return kept


def get_progress(responses: Mapping[str, Any], path: Any) -> ProgressReport:
    """Percentage of required questions answered, plus the next question to ask."""
    path = resolve_path(path)
    visible = [q for q in questions_for_path(path) if _trigger_met(q, responses)]
    required = [q for q in visible if q.required]
    answered = [q for q in required if _is_answered(responses.get(q.id))]

    percent = round(len(answered) * 100 / len(required)) if required else 100

    next_question = next(
        (q for q in required if not _is_answered(responses.get(q.id))),
        None,
    )
    if next_question is None:
        next_question = next(
            (q for q in visible if not q.required and q.id not in responses),
            None,
        )

    return ProgressReport(
        percent=percent,
        next_question_id=next_question.id if next_question else None,
        answered_required=len(answered),
        total_required=len(required),
    )


# =============================================================================
# SESSION TRANSITIONS
# =============================================================================

class AssessmentStateMachine:
    """
    Drives an AssessmentSession through its states.

    Every transition returns a new session object; the input is left untouched.
    """

    def __init__(self, ttl_hours: int = 24):
        self.ttl_hours = ttl_hours

    def start(self, session_id: str, now: Optional[datetime] = None) -> AssessmentSession:
        now = now or datetime.utcnow()
        return AssessmentSession(
            session_id=session_id,
            status=SessionStatus.ACTIVE,
            state=AssessmentState.BRANCHING_PENDING,
            created_at=now,
            updated_at=now,
            expires_at=now + timedelta(hours=self.ttl_hours),
        )

    def answer(self, session: AssessmentSession, answers: Mapping[str, Any]) -> AssessmentSession:
        if session.status == SessionStatus.COMPLETED:
            raise InvalidTransitionError(f"Session {session.session_id} is already completed")

        current_path = PathId(session.path) if session.path else None
        if BRANCHING_QUESTION_ID in answers and _is_answered(answers[BRANCHING_QUESTION_ID]):
            branching_answer = answers[BRANCHING_QUESTION_ID]
            # An unknown value must not lock the session onto the default path
            if not is_known_branching_answer(branching_answer):
                raise InvalidTransitionError(
                    f"Unrecognized answer '{branching_answer}' for {BRANCHING_QUESTION_ID}"
                )
            chosen = determine_path(branching_answer)
            if current_path is not None and chosen != current_path:
                raise InvalidTransitionError(
                    f"Session {session.session_id} is locked to path '{current_path.value}'"
                )
            current_path = chosen

        merged = dict(session.responses)
        merged.update(answers)

        state = PATH_ACTIVE_STATE[current_path] if current_path else AssessmentState.BRANCHING_PENDING
        return session.model_copy(update={
            "responses": merged,
            "path": current_path.value if current_path else None,
            "state": state.value,
            "status": SessionStatus.ACTIVE.value,
            "updated_at": datetime.utcnow(),
        })

    def complete(self, session: AssessmentSession) -> Tuple[AssessmentSession, ValidationReport]:
        """Move to completed; raises AssessmentValidationError on blocking errors."""
        if session.status == SessionStatus.COMPLETED:
            raise InvalidTransitionError(f"Session {session.session_id} is already completed")

        path = PathId(session.path) if session.path else DEFAULT_PATH
        report = validate_responses(session.responses, path)
        if not report.is_valid:
            logger.info(f"⛔ Session {session.session_id} cannot complete: {len(report.errors)} blocking error(s)")
            raise AssessmentValidationError(report)

        now = datetime.utcnow()
        completed = session.model_copy(update={
            "path": path.value,
            "state": AssessmentState.COMPLETED.value,
            "status": SessionStatus.COMPLETED.value,
            "updated_at": now,
            "completed_at": now,
        })
        return completed, report
