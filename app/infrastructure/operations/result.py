"""Submission result dataclass.

Terminal outcome of driving one operation through the retry orchestrator.
Failures are returned as values, never raised.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from infrastructure.operations.failures import USER_ACTIONS, FailureAnalysis
from infrastructure.operations.status import SubmissionStatus

if TYPE_CHECKING:
    from infrastructure.resilience.retry.models import SubmissionAttempt


@dataclass(frozen=True)
class SubmissionResult:
    """Uniform result returned from submissions.

    Attributes:
        status: SubmissionStatus -- terminal outcome
        message: str -- human-friendly message for logs/troubleshooting
        transaction_id: Optional[str] -- chain-scoped id, set on success
        attempts: int -- number of send attempts made (0 if never submitted)
        classification: Optional[FailureAnalysis] -- last failure, on failure
        history: tuple -- every attempt made, on failure
        elapsed_seconds: float -- wall time spent in the orchestrator
    """

    status: SubmissionStatus
    message: str
    transaction_id: Optional[str] = None
    attempts: int = 0
    classification: Optional[FailureAnalysis] = None
    history: tuple["SubmissionAttempt", ...] = field(default_factory=tuple)
    elapsed_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """True if the operation was confirmed by the network."""
        return self.status == SubmissionStatus.SUCCESS

    @classmethod
    def success(
        cls,
        transaction_id: str,
        attempts: int,
        elapsed_seconds: float = 0.0,
        message: str = "ok",
    ) -> "SubmissionResult":
        """Create a SUCCESS result carrying the transaction id."""
        return cls(
            status=SubmissionStatus.SUCCESS,
            message=message,
            transaction_id=transaction_id,
            attempts=attempts,
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def exhausted(
        cls,
        classification: FailureAnalysis,
        history: tuple["SubmissionAttempt", ...] = (),
        message: Optional[str] = None,
        elapsed_seconds: float = 0.0,
    ) -> "SubmissionResult":
        """Create an EXHAUSTED result.

        Use when recoverable failures outlived the retry budget or the
        operation deadline.

        Args:
            classification: Analysis of the last failure
            history: Attempts made, oldest first
            message: Overrides the default message
            elapsed_seconds: Wall time spent

        Returns:
            SubmissionResult with EXHAUSTED status
        """
        history = tuple(history)
        return cls(
            status=SubmissionStatus.EXHAUSTED,
            message=message
            or f"Transaction failed after {len(history)} attempts: "
            f"{classification.message or classification.description}",
            attempts=len(history),
            classification=classification,
            history=history,
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def unrecoverable(
        cls,
        classification: FailureAnalysis,
        history: tuple["SubmissionAttempt", ...] = (),
        message: Optional[str] = None,
        elapsed_seconds: float = 0.0,
    ) -> "SubmissionResult":
        """Create an UNRECOVERABLE result.

        Use for failures retrying cannot fix: validation errors found before
        submission (empty history, zero attempts) or terminal errors
        reported by the network.

        Returns:
            SubmissionResult with UNRECOVERABLE status
        """
        history = tuple(history)
        return cls(
            status=SubmissionStatus.UNRECOVERABLE,
            message=message
            or f"Unrecoverable transaction error: {classification.description}",
            attempts=len(history),
            classification=classification,
            history=history,
            elapsed_seconds=elapsed_seconds,
        )

    def recovery_summary(self) -> str:
        """Describe the corrective actions applied across attempts."""
        lines = [
            f"- Attempt {entry.attempt}: {entry.action.description}"
            for entry in self.history
            if entry.action.is_corrective
        ]
        if not lines:
            return "No recovery actions were attempted."
        return "\n".join(lines)

    def suggested_actions(self) -> list[str]:
        """Steps a caller can take after a failure."""
        if self.is_success or self.classification is None:
            return []
        if self.status == SubmissionStatus.EXHAUSTED:
            return ["Wait a moment and try again"]
        return list(
            USER_ACTIONS.get(
                self.classification.kind, ["Please try again or contact support"]
            )
        )
