"""
Session stores.

Persistence for AssessmentSession objects, keyed by an opaque session id.
Expired sessions behave as if they do not exist. State transitions are the
state machine's job; the store applies them to the latest saved copy while
holding that session's lock, so concurrent edits never overwrite each other.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.assessment_session import AssessmentSessionRecord
from .contracts import AssessmentSession
from .errors import PersistenceError, SessionNotFoundError

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return uuid.uuid4().hex


def _expired(session: AssessmentSession, now: Optional[datetime] = None) -> bool:
    if session.expires_at is None:
        return False
    return session.expires_at <= (now or datetime.utcnow())


Transition = Callable[[AssessmentSession], AssessmentSession]


class SessionStore(Protocol):
    def create(self, session: AssessmentSession) -> AssessmentSession:
        ...

    def get(self, session_id: str) -> AssessmentSession:
        ...

    def update_answers(self, session_id: str, transition: Transition) -> AssessmentSession:
        ...

    def mark_complete(self, session_id: str, transition: Transition) -> AssessmentSession:
        ...


class InMemorySessionStore:
    """Process-local store; one lock serializes all writes."""

    def __init__(self):
        self._sessions: Dict[str, AssessmentSession] = {}
        self._lock = threading.Lock()

    def create(self, session: AssessmentSession) -> AssessmentSession:
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> AssessmentSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if _expired(session):
                del self._sessions[session_id]
                raise SessionNotFoundError(session_id)
            return session

    def _modify(self, session_id: str, transition: Transition) -> AssessmentSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or _expired(session):
                raise SessionNotFoundError(session_id)
            updated = transition(session)
            self._sessions[session_id] = updated
        return updated

    def update_answers(self, session_id: str, transition: Transition) -> AssessmentSession:
        return self._modify(session_id, transition)

    def mark_complete(self, session_id: str, transition: Transition) -> AssessmentSession:
        return self._modify(session_id, transition)

    def purge_expired(self) -> int:
        now = datetime.utcnow()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if _expired(s, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info(f"🧹 Purged {len(expired)} expired sessions")
        return len(expired)


class SqlSessionStore:
    """SQLAlchemy-backed store; each call runs in its own transaction."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    @contextmanager
    def _db(self):
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Session store failure: {e}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _to_model(record: AssessmentSessionRecord) -> AssessmentSession:
        return AssessmentSession(
            session_id=record.id,
            status=record.status,
            state=record.state,
            path=record.path,
            responses=dict(record.responses or {}),
            created_at=record.created_at,
            updated_at=record.updated_at,
            completed_at=record.completed_at,
            expires_at=record.expires_at,
        )

    @staticmethod
    def _apply(record: AssessmentSessionRecord, session: AssessmentSession) -> None:
        record.status = session.status
        record.state = session.state
        record.path = session.path
        record.responses = dict(session.responses)
        record.updated_at = session.updated_at
        record.completed_at = session.completed_at
        record.expires_at = session.expires_at

    def create(self, session: AssessmentSession) -> AssessmentSession:
        with self._db() as db:
            record = AssessmentSessionRecord(id=session.session_id, created_at=session.created_at)
            self._apply(record, session)
            db.add(record)
        return session

    def get(self, session_id: str) -> AssessmentSession:
        with self._db() as db:
            record = db.get(AssessmentSessionRecord, session_id)
            if record is None:
                raise SessionNotFoundError(session_id)
            session = self._to_model(record)
        if _expired(session):
            raise SessionNotFoundError(session_id)
        return session

    def _modify(self, session_id: str, transition: Transition) -> AssessmentSession:
        # The row stays locked from read to write
        with self._db() as db:
            record = db.get(AssessmentSessionRecord, session_id, with_for_update=True)
            if record is None:
                raise SessionNotFoundError(session_id)
            session = self._to_model(record)
            if _expired(session):
                raise SessionNotFoundError(session_id)
            updated = transition(session)
            self._apply(record, updated)
        return updated

    def update_answers(self, session_id: str, transition: Transition) -> AssessmentSession:
        return self._modify(session_id, transition)

    def mark_complete(self, session_id: str, transition: Transition) -> AssessmentSession:
        return self._modify(session_id, transition)
