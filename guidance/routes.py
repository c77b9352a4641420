"""
Guidance API Routes

Exposes the assessment state machine, matching and recommendations via REST.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from db import SessionLocal

from .logic.errors import (
    AssessmentValidationError,
    InvalidTransitionError,
    SessionNotFoundError,
    UnknownPathError,
)
from .logic.questions import questions_for_path
from .logic.runner import AssessmentRunner
from .logic.session_store import SqlSessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessment", tags=["assessment"])


@lru_cache()
def get_runner() -> AssessmentRunner:
    return AssessmentRunner(session_store=SqlSessionStore(SessionLocal))


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class PathRequest(BaseModel):
    answer: Optional[str] = Field(
        default=None,
        description="Answer to the branching question",
        example="hard_hat",
    )


class ResponsesRequest(BaseModel):
    responses: Dict[str, Any] = Field(
        ...,
        description="Question id -> answer",
        example={
            "grade": "11",
            "zip_code": "30301",
            "work_preference_main": "non_hard_hat",
            "education_commitment": "associate",
            "subject_strengths": {"science": 5, "math": 4},
            "non_hard_hat_specific": "healthcare",
        },
    )
    path: str = Field(..., description="hands_on | other_work | exploring", example="other_work")


class SubmitRequest(ResponsesRequest):
    limit: Optional[int] = Field(default=None, ge=1, le=50, description="Max matches to return")


class AnswersRequest(BaseModel):
    answers: Dict[str, Any] = Field(..., description="Question id -> answer")


# =============================================================================
# HELPERS
# =============================================================================

def _validation_failed(e: AssessmentValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": str(e), "validation": e.report.model_dump(mode="json")},
    )


def _internal_error(e: Exception) -> JSONResponse:
    logger.exception(f"❌ Unexpected error: {e}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# =============================================================================
# STATELESS ENDPOINTS
# =============================================================================

@router.get("/questions", summary="Questions for a path")
def list_questions(path: str = Query(..., description="hands_on | other_work | exploring")):
    try:
        questions = questions_for_path(path)
    except UnknownPathError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "path": path,
        "questions": [q.model_dump(mode="json") for q in questions],
    }


@router.post("/path", summary="Determine path from the branching answer")
def determine_path(request: PathRequest, runner: AssessmentRunner = Depends(get_runner)):
    return {"path": runner.determine_path(request.answer).value}


@router.post("/validate", summary="Validate responses for a path")
def validate(request: ResponsesRequest, runner: AssessmentRunner = Depends(get_runner)):
    try:
        return runner.validate(request.responses, request.path).model_dump(mode="json")
    except UnknownPathError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/progress", summary="Completion progress for a path")
def progress(request: ResponsesRequest, runner: AssessmentRunner = Depends(get_runner)):
    try:
        return runner.progress(request.responses, request.path).model_dump(mode="json")
    except UnknownPathError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/submit", summary="Score responses and build recommendations")
def submit(request: SubmitRequest, runner: AssessmentRunner = Depends(get_runner)):
    """
    Run the full pipeline: validate, build profile, match careers, write recommendations.

    **Response:**
    - Ranked career matches with explanations
    - Recommendations for the top careers
    - Merged academic plan
    """
    try:
        result = runner.submit(request.responses, request.path, limit=request.limit)
        return result.model_dump(mode="json")
    except AssessmentValidationError as e:
        return _validation_failed(e)
    except UnknownPathError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        return _internal_error(e)


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================

@router.post("/sessions", summary="Start an assessment session")
def create_session(runner: AssessmentRunner = Depends(get_runner)):
    return runner.start_session().model_dump(mode="json")


@router.get("/sessions/{session_id}", summary="Get a session")
def get_session(session_id: str, runner: AssessmentRunner = Depends(get_runner)):
    try:
        return runner.get_session(session_id).model_dump(mode="json")
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/sessions/{session_id}/answers", summary="Save answers to a session")
def save_answers(session_id: str, request: AnswersRequest, runner: AssessmentRunner = Depends(get_runner)):
    try:
        return runner.answer(session_id, request.answers).model_dump(mode="json")
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/sessions/{session_id}/progress", summary="Progress of a session")
def session_progress(session_id: str, runner: AssessmentRunner = Depends(get_runner)):
    try:
        return runner.session_progress(session_id).model_dump(mode="json")
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sessions/{session_id}/complete", summary="Complete a session and get results")
def complete_session(
    session_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    runner: AssessmentRunner = Depends(get_runner),
):
    try:
        return runner.complete_session(session_id, limit=limit).model_dump(mode="json")
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssessmentValidationError as e:
        return _validation_failed(e)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        return _internal_error(e)


@router.get("/health", summary="Health check")
def health_check(runner: AssessmentRunner = Depends(get_runner)):
    return {
        "status": "healthy",
        "service": "guidance-engine",
        "careers_loaded": len(runner.engine.catalog),
        "generative_provider": runner.augmenter.provider is not None,
    }
