"""Resilience patterns for transaction submission.

Backoff scheduling and the retry orchestrator that drives submissions
through transient network failures.
"""

from infrastructure.resilience.backoff import BackoffStrategy, compute_delay
from infrastructure.resilience.retry import (
    InvalidResilienceConfigError,
    ResilienceConfig,
    RetryOrchestrator,
    create_resilience_config,
)

__all__ = [
    "BackoffStrategy",
    "compute_delay",
    "InvalidResilienceConfigError",
    "ResilienceConfig",
    "RetryOrchestrator",
    "create_resilience_config",
]
