"""
Assessment Runner

Orchestrates the guidance pipeline:
1. Validates responses for the chosen path
2. Builds the StudentProfile
3. Runs the matching engine
4. Augments the top matches with recommendations
5. Assembles the SubmissionResult

This is a pure orchestration layer - no scoring, no text generation rules.
"""

import logging
import time
from typing import Any, Mapping, Optional

from ..ai.augmenter import RecommendationAugmenter
from ..ai.provider import GenerativeTextProvider, build_default_provider
from ..config import Settings, get_settings
from .catalog import CareerCatalog
from .constants import PathId
from .contracts import AssessmentSession, ProgressReport, SubmissionResult, ValidationReport
from .engine import MatchingEngine
from .errors import AssessmentValidationError, PersistenceError
from .labor_market import LaborMarketProvider
from .output_assembler import assemble_submission
from .profile_builder import build_profile
from .session_store import InMemorySessionStore, SessionStore, new_session_id
from .state_machine import (
    AssessmentStateMachine,
    applicable_responses,
    determine_path,
    get_progress,
    resolve_path,
    validate_responses,
)

logger = logging.getLogger(__name__)


class AssessmentRunner:
    """
    Entry point used by the API layer.

    Stateless per submission; the only shared objects are the catalog
    (read-only) and the injected collaborators.
    """

    def __init__(
        self,
        catalog: Optional[CareerCatalog] = None,
        provider: Optional[GenerativeTextProvider] = None,
        labor_market: Optional[LaborMarketProvider] = None,
        session_store: Optional[SessionStore] = None,
        settings: Optional[Settings] = None,
        use_default_provider: bool = True,
    ):
        self.settings = settings or get_settings()
        if provider is None and use_default_provider:
            provider = build_default_provider(self.settings)
        self.engine = MatchingEngine(
            catalog=catalog,
            labor_market=labor_market,
            default_limit=self.settings.default_match_count,
        )
        self.augmenter = RecommendationAugmenter(provider=provider, settings=self.settings)
        self.sessions = session_store or InMemorySessionStore()
        self.state_machine = AssessmentStateMachine(ttl_hours=self.settings.session_ttl_hours)

    # -------------------------------------------------------------------------
    # Stateless operations
    # -------------------------------------------------------------------------

    def determine_path(self, branching_answer: Any) -> PathId:
        return determine_path(branching_answer)

    def validate(self, responses: Mapping[str, Any], path: Any) -> ValidationReport:
        return validate_responses(responses, path)

    def progress(self, responses: Mapping[str, Any], path: Any) -> ProgressReport:
        return get_progress(responses, path)

    def submit(
        self,
        responses: Mapping[str, Any],
        path: Any,
        limit: Optional[int] = None,
        session_id: Optional[str] = None,
    ) -> SubmissionResult:
        """
        Run the full pipeline.

        Raises AssessmentValidationError when any blocking error is present.
        """
        start_time = time.perf_counter()
        path = resolve_path(path)

        logger.info(f"🚀 Starting guidance pipeline (path={path.value}, session={session_id or 'none'})")

        validation = validate_responses(responses, path)
        if not validation.is_valid:
            logger.info(f"⛔ Submission rejected: {len(validation.errors)} blocking error(s)")
            raise AssessmentValidationError(validation)
        if validation.warnings:
            logger.info(f"ℹ️ {len(validation.warnings)} warning(s); affected answers ignored")

        profile = build_profile(responses, path)
        logger.info(f"🎯 Interests: {profile.interests} | Education goal: {profile.education_goal}")

        matches = self.engine.match(profile, limit=limit)
        logger.info(f"✅ {len(matches)} matches, top: {matches[0].career_id if matches else 'none'}")

        answers = applicable_responses(responses, path)
        recommendations = self.augmenter.augment(profile, matches, answers=answers)

        processing_time = (time.perf_counter() - start_time) * 1000
        return assemble_submission(
            profile=profile,
            validation=validation,
            matches=matches,
            recommendations=recommendations,
            processing_time_ms=processing_time,
            session_id=session_id,
            warnings=[w.message for w in validation.warnings],
        )

    # -------------------------------------------------------------------------
    # Session operations
    # -------------------------------------------------------------------------

    def start_session(self) -> AssessmentSession:
        session = self.state_machine.start(new_session_id())
        return self.sessions.create(session)

    def get_session(self, session_id: str) -> AssessmentSession:
        return self.sessions.get(session_id)

    def answer(self, session_id: str, answers: Mapping[str, Any]) -> AssessmentSession:
        return self.sessions.update_answers(
            session_id, lambda session: self.state_machine.answer(session, answers)
        )

    def session_progress(self, session_id: str) -> ProgressReport:
        session = self.sessions.get(session_id)
        path = session.path or determine_path(session.responses.get("work_preference_main"))
        return get_progress(session.responses, path)

    def complete_session(self, session_id: str, limit: Optional[int] = None) -> SubmissionResult:
        """
        Validate, run the pipeline and mark the session completed.

        A failed save is logged; the computed result is still returned.
        """
        session = self.sessions.get(session_id)
        completed, _ = self.state_machine.complete(session)
        result = self.submit(completed.responses, completed.path, limit=limit, session_id=session_id)

        try:
            self.sessions.mark_complete(session_id, lambda current: self.state_machine.complete(current)[0])
        except PersistenceError as e:
            logger.error(f"❌ Could not save completed session {session_id}: {e}")
            result.warnings.append("Your results could not be saved, but are shown below.")
        return result

