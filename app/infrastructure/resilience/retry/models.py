"""Retry orchestrator models.

Data passed between the orchestrator, the operation it drives and the
progress sink observing it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from infrastructure.operations.failures import FailureAnalysis


class CorrectiveAction(Enum):
    """Adjustment applied to the submission options before an attempt.

    Values:
        NONE: Submit unchanged
        INCREASE_BUDGET: Multiply the gas budget
        REFRESH_NONCE: Fetch a fresh nonce from the network
        FALLBACK_SPONSORED: Route through the fallback paymaster
    """

    NONE = "none"
    INCREASE_BUDGET = "increase_budget"
    REFRESH_NONCE = "refresh_nonce"
    FALLBACK_SPONSORED = "fallback_sponsored"

    @property
    def is_corrective(self) -> bool:
        return self != CorrectiveAction.NONE

    @property
    def description(self) -> str:
        return {
            CorrectiveAction.NONE: "Retried without changes",
            CorrectiveAction.INCREASE_BUDGET: "Increased gas budget",
            CorrectiveAction.REFRESH_NONCE: "Refreshed nonce from network",
            CorrectiveAction.FALLBACK_SPONSORED: "Fell back to sponsored transaction",
        }[self]


class AttemptOutcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ProgressStage(Enum):
    """Points in a submission's lifecycle reported to the progress sink."""

    ATTEMPT_STARTED = "attempt_started"
    ATTEMPT_FAILED = "attempt_failed"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    UNRECOVERABLE = "unrecoverable"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ProgressStage.SUCCEEDED,
            ProgressStage.EXHAUSTED,
            ProgressStage.UNRECOVERABLE,
        )


@dataclass
class SubmissionOptions:
    """Mutable knobs the orchestrator adjusts between attempts.

    Attributes:
        gas_multiplier: Factor applied to the client's gas estimate
        refresh_nonce: Ask the client to fetch a fresh nonce for this attempt
        paymaster_url: Paymaster sponsoring the operation, if any
    """

    gas_multiplier: float = 1.0
    refresh_nonce: bool = False
    paymaster_url: Optional[str] = None


@dataclass(frozen=True)
class SubmissionAttempt:
    """Record of one send attempt.

    Attributes:
        attempt: 1-based attempt number
        action: Corrective action applied before this attempt
        outcome: How the attempt ended
        failure: Classification when the attempt failed
        timestamp: When the attempt started (UTC)
    """

    attempt: int
    action: CorrectiveAction
    outcome: AttemptOutcome
    failure: Optional[FailureAnalysis] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ProgressEvent:
    """Observation emitted to a progress sink.

    Attributes:
        stage: Lifecycle point being reported
        attempt: Attempt the event concerns (the upcoming one for RETRY_SCHEDULED)
        max_attempts: Attempt budget for the submission
        action: Corrective action for that attempt
        failure: Failure that triggered the event, if any
        delay_seconds: Backoff wait, for RETRY_SCHEDULED
        transaction_id: Chain-scoped id, for SUCCEEDED
    """

    stage: ProgressStage
    attempt: int
    max_attempts: int
    action: CorrectiveAction = CorrectiveAction.NONE
    failure: Optional[FailureAnalysis] = None
    delay_seconds: Optional[float] = None
    transaction_id: Optional[str] = None
