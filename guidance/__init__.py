"""
Career guidance engine: branching self-assessment, career matching and
recommendation generation.
"""

from .logic.runner import AssessmentRunner

__all__ = ["AssessmentRunner"]
