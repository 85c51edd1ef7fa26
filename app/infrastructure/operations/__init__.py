"""Submission outcomes and failure classification.

Standardized result and failure types shared by the retry orchestrator
and the feature modules that submit through it.
"""

from infrastructure.operations.classifiers import classify_failure
from infrastructure.operations.failures import (
    RECOVERABLE_KINDS,
    FailureAnalysis,
    FailureKind,
)
from infrastructure.operations.result import SubmissionResult
from infrastructure.operations.status import SubmissionStatus

__all__ = [
    "FailureAnalysis",
    "FailureKind",
    "RECOVERABLE_KINDS",
    "SubmissionResult",
    "SubmissionStatus",
    "classify_failure",
]
