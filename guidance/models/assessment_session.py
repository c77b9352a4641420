from sqlalchemy import Column, String, DateTime, JSON

from .base import Base


class AssessmentSessionRecord(Base):
    __tablename__ = "assessment_sessions"

    id = Column(String, primary_key=True)
    status = Column(String, nullable=False)
    state = Column(String, nullable=False)
    path = Column(String)
    responses = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime)
    expires_at = Column(DateTime)
