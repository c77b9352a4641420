"""
Exceptions raised by the guidance engine.

Provider errors are absorbed by the recommendation augmenter and never reach
callers. Everything else maps onto one of three user-visible classes:
invalid input, not found, or internal failure.
"""

from typing import Optional


class GuidanceError(Exception):
    """Base class for all guidance engine errors."""


class AssessmentValidationError(GuidanceError):
    """Responses failed validation; carries the ValidationReport."""

    def __init__(self, report, message: str = "Assessment responses are invalid"):
        super().__init__(message)
        self.report = report


class InvalidTransitionError(GuidanceError):
    """Illegal state machine move (path change after lock, edit after completion)."""


class UnknownPathError(GuidanceError):
    pass


class SessionNotFoundError(GuidanceError):
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class CatalogLookupError(GuidanceError):
    def __init__(self, reference: str):
        super().__init__(f"Career not found in catalog: {reference}")
        self.reference = reference


class ProviderError(GuidanceError):
    """Generative provider could not produce a usable response."""


class ProviderTimeoutError(ProviderError):
    def __init__(self, timeout: Optional[float] = None):
        super().__init__(f"Provider did not respond within {timeout}s")
        self.timeout = timeout


class ProviderMalformedResponseError(ProviderError):
    pass


class PersistenceError(GuidanceError):
    pass
