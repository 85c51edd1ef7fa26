"""Retry system for transaction submissions.

Drives one operation through send/confirm attempts, classifying each
failure and applying corrective actions between attempts.

Architecture:
- ResilienceConfig: Retry budget, backoff, corrective-action switches
- RetryOrchestrator: Async state machine producing a SubmissionResult
- SubmittableOperation: Protocol for what gets submitted
- CallBatchOperation: Batched contract calls through a NetworkClient
- ProgressChannel: Bounded progress sink

Usage:
    from infrastructure.resilience.retry import (
        CallBatchOperation,
        RetryOrchestrator,
        create_resilience_config,
    )

    config = create_resilience_config(max_retries=5)
    result = await RetryOrchestrator().submit(
        CallBatchOperation(client, calls), config
    )
"""

from infrastructure.resilience.retry.config import (
    InvalidResilienceConfigError,
    ResilienceConfig,
)
from infrastructure.resilience.retry.factory import create_resilience_config
from infrastructure.resilience.retry.models import (
    AttemptOutcome,
    CorrectiveAction,
    ProgressEvent,
    ProgressStage,
    SubmissionAttempt,
    SubmissionOptions,
)
from infrastructure.resilience.retry.operation import (
    CallBatchOperation,
    SubmittableOperation,
)
from infrastructure.resilience.retry.orchestrator import (
    ReceiptFailedError,
    RetryOrchestrator,
)
from infrastructure.resilience.retry.progress import ProgressChannel, ProgressSink

__all__ = [
    # Models
    "AttemptOutcome",
    "CorrectiveAction",
    "ProgressEvent",
    "ProgressStage",
    "SubmissionAttempt",
    "SubmissionOptions",
    # Configuration
    "InvalidResilienceConfigError",
    "ResilienceConfig",
    "create_resilience_config",
    # Operations
    "CallBatchOperation",
    "SubmittableOperation",
    # Orchestrator
    "ReceiptFailedError",
    "RetryOrchestrator",
    # Progress
    "ProgressChannel",
    "ProgressSink",
]
