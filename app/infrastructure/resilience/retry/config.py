"""Resilience configuration for transaction submissions."""

import inspect
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from infrastructure.resilience.backoff import BackoffStrategy
from infrastructure.resilience.retry.progress import ProgressSink

MAX_RETRIES_LIMIT = 10
MIN_GAS_MULTIPLIER = 1.0
MAX_GAS_MULTIPLIER = 3.0


class InvalidResilienceConfigError(ValueError):
    """A resilience configuration value is out of range."""

    def __init__(self, field_name: str, value: Any, constraint: str):
        super().__init__(
            f"Invalid resilience config: {field_name} ({value!r}) - {constraint}"
        )
        self.field = field_name
        self.value = value
        self.constraint = constraint


@dataclass
class ResilienceConfig:
    """Configuration for one submission's retry behavior.

    Attributes:
        max_retries: Retries after the first attempt (0..10)
        backoff_strategy: fixed, linear or exponential
        base_delay_seconds: Delay unit for backoff
        max_delay_seconds: Optional cap on every delay
        jitter: Apply +/-10% random jitter to delays
        auto_gas_adjust: Raise the gas budget after out-of-gas failures
        gas_multiplier: Factor applied per gas increase (1..3)
        auto_nonce_refresh: Refresh the nonce after nonce conflicts
        fallback_to_sponsored: Switch to ``fallback_paymaster_url`` once when
            the primary path cannot pay for gas
        fallback_paymaster_url: Paymaster for the sponsored fallback
        timeout_seconds: Deadline for the whole submission, retries included
        progress_sink: Optional callable receiving ``ProgressEvent`` values.
            Called synchronously, so it must not be a coroutine function

    Example:
        config = ResilienceConfig(max_retries=5, backoff_strategy="linear")
    """

    max_retries: int = 3
    backoff_strategy: Union[BackoffStrategy, str] = BackoffStrategy.EXPONENTIAL
    base_delay_seconds: float = 1.0
    max_delay_seconds: Optional[float] = 30.0
    jitter: bool = True
    auto_gas_adjust: bool = True
    gas_multiplier: float = 1.2
    auto_nonce_refresh: bool = True
    fallback_to_sponsored: bool = False
    fallback_paymaster_url: Optional[str] = None
    timeout_seconds: float = 60.0
    progress_sink: Optional[ProgressSink] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        try:
            self.backoff_strategy = BackoffStrategy(self.backoff_strategy)
        except ValueError:
            raise InvalidResilienceConfigError(
                "backoff_strategy",
                self.backoff_strategy,
                "must be one of: fixed, linear, exponential",
            ) from None

        if (
            not isinstance(self.max_retries, int)
            or isinstance(self.max_retries, bool)
            or self.max_retries < 0
        ):
            raise InvalidResilienceConfigError(
                "max_retries", self.max_retries, "must be a non-negative integer"
            )
        if self.max_retries > MAX_RETRIES_LIMIT:
            raise InvalidResilienceConfigError(
                "max_retries",
                self.max_retries,
                f"must not exceed {MAX_RETRIES_LIMIT}",
            )
        if self.base_delay_seconds < 0:
            raise InvalidResilienceConfigError(
                "base_delay_seconds", self.base_delay_seconds, "must be non-negative"
            )
        if self.max_delay_seconds is not None:
            if self.max_delay_seconds < 0:
                raise InvalidResilienceConfigError(
                    "max_delay_seconds", self.max_delay_seconds, "must be non-negative"
                )
            if self.base_delay_seconds > self.max_delay_seconds:
                raise InvalidResilienceConfigError(
                    "base_delay_seconds",
                    self.base_delay_seconds,
                    "must not exceed max_delay_seconds",
                )
        if not MIN_GAS_MULTIPLIER <= self.gas_multiplier <= MAX_GAS_MULTIPLIER:
            raise InvalidResilienceConfigError(
                "gas_multiplier",
                self.gas_multiplier,
                f"must be between {MIN_GAS_MULTIPLIER} and {MAX_GAS_MULTIPLIER}",
            )
        if self.fallback_to_sponsored and not self.fallback_paymaster_url:
            raise InvalidResilienceConfigError(
                "fallback_paymaster_url",
                self.fallback_paymaster_url,
                "must be provided when fallback_to_sponsored is true",
            )
        if self.timeout_seconds <= 0:
            raise InvalidResilienceConfigError(
                "timeout_seconds", self.timeout_seconds, "must be positive"
            )
        if self.progress_sink is not None:
            if not callable(self.progress_sink):
                raise InvalidResilienceConfigError(
                    "progress_sink", self.progress_sink, "must be callable"
                )
            if inspect.iscoroutinefunction(
                self.progress_sink
            ) or inspect.iscoroutinefunction(
                getattr(self.progress_sink, "__call__", None)
            ):
                raise InvalidResilienceConfigError(
                    "progress_sink",
                    self.progress_sink,
                    "must be a plain callable, not a coroutine function",
                )

    @property
    def max_attempts(self) -> int:
        """Total attempts allowed, the first one included."""
        return self.max_retries + 1
