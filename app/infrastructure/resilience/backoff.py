"""Backoff delay computation for retried submissions."""

import random
from enum import Enum
from typing import Optional, Protocol, Union

JITTER_RATIO = 0.1


class BackoffStrategy(Enum):
    """How the delay grows between attempts.

    Values:
        FIXED: base
        LINEAR: base * attempt
        EXPONENTIAL: base * 2 ^ (attempt - 1)
    """

    FIXED = "fixed"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class RandomSource(Protocol):
    def random(self) -> float: ...


def compute_delay(
    strategy: Union[BackoffStrategy, str],
    attempt: int,
    base_delay_seconds: float,
    max_delay_seconds: Optional[float] = None,
    jitter: bool = False,
    rng: Optional[RandomSource] = None,
) -> float:
    """Compute the wait before retrying after ``attempt`` failed.

    Jitter perturbs the raw delay by up to +/-10% and is applied before the
    cap, so the result never exceeds ``max_delay_seconds``.

    Args:
        strategy: Backoff strategy (enum member or its value)
        attempt: 1-based number of the attempt that just failed
        base_delay_seconds: Delay unit
        max_delay_seconds: Optional cap
        jitter: Apply bounded random jitter
        rng: Random source with a ``random()`` method (defaults to ``random``)

    Returns:
        Delay in seconds, never negative.

    Raises:
        ValueError: If attempt < 1 or the strategy is unknown.

    Example:
        >>> compute_delay("exponential", 3, 1.0)
        4.0
    """
    if attempt < 1:
        raise ValueError("attempt must be at least 1")
    strategy = BackoffStrategy(strategy)

    if strategy == BackoffStrategy.EXPONENTIAL:
        delay = base_delay_seconds * (2 ** (attempt - 1))
    elif strategy == BackoffStrategy.LINEAR:
        delay = base_delay_seconds * attempt
    else:
        delay = base_delay_seconds

    if jitter and delay > 0:
        source = rng or random
        delay += delay * JITTER_RATIO * (source.random() * 2 - 1)

    if max_delay_seconds is not None:
        delay = min(delay, max_delay_seconds)
    return max(delay, 0.0)
