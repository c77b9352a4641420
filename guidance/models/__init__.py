from .assessment_session import AssessmentSessionRecord

__all__ = ["AssessmentSessionRecord"]
