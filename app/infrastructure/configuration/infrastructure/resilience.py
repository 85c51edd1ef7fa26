"""Resilience (retry/backoff) infrastructure settings."""

from typing import Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings

VALID_BACKOFF_STRATEGIES = ("fixed", "linear", "exponential")


class ResilienceSettings(InfrastructureSettings):
    """Default resilience configuration for transaction submissions.

    These values seed ``ResilienceConfig`` whenever a caller does not pass
    an explicit configuration to the retry orchestrator.

    Environment Variables:
        RESILIENCE_MAX_RETRIES: Retries after the first attempt (default: 3)
        RESILIENCE_BACKOFF_STRATEGY: 'fixed', 'linear' or 'exponential'
        RESILIENCE_BASE_DELAY_SECONDS: Delay before the first retry (default: 1s)
        RESILIENCE_MAX_DELAY_SECONDS: Cap applied to every delay (default: 30s)
        RESILIENCE_JITTER: Perturb delays by up to +/-10% (default: True)
        RESILIENCE_AUTO_GAS_ADJUST: Raise the gas budget on out-of-gas failures
        RESILIENCE_GAS_MULTIPLIER: Factor applied per gas increase (default: 1.2)
        RESILIENCE_AUTO_NONCE_REFRESH: Refresh the nonce on nonce conflicts
        RESILIENCE_FALLBACK_TO_SPONSORED: Switch to a paymaster when the
            primary execution path cannot pay for gas
        RESILIENCE_FALLBACK_PAYMASTER_URL: Paymaster used for that fallback
        RESILIENCE_TIMEOUT_SECONDS: Deadline for the whole submission (default: 60s)

    Backoff:
        fixed:       base
        linear:      base * attempt
        exponential: base * 2 ^ (attempt - 1), capped at max delay

        Example with defaults (exponential, base=1s, max=30s):
            Attempt 1: 1s
            Attempt 2: 2s
            Attempt 3: 4s
            Attempt 6: 30s (capped)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        max_retries = settings.resilience.max_retries
        ```
    """

    max_retries: int = Field(
        default=3,
        alias="RESILIENCE_MAX_RETRIES",
        description="Retries allowed after the initial attempt",
    )
    backoff_strategy: str = Field(
        default="exponential",
        alias="RESILIENCE_BACKOFF_STRATEGY",
        description="Backoff strategy: 'fixed', 'linear' or 'exponential'",
    )
    base_delay_seconds: float = Field(
        default=1.0,
        alias="RESILIENCE_BASE_DELAY_SECONDS",
        description="Base backoff delay (seconds)",
    )
    max_delay_seconds: Optional[float] = Field(
        default=30.0,
        alias="RESILIENCE_MAX_DELAY_SECONDS",
        description="Maximum backoff delay (seconds)",
    )
    jitter: bool = Field(
        default=True,
        alias="RESILIENCE_JITTER",
        description="Apply bounded random jitter to backoff delays",
    )
    auto_gas_adjust: bool = Field(
        default=True,
        alias="RESILIENCE_AUTO_GAS_ADJUST",
        description="Increase the gas budget after out-of-gas failures",
    )
    gas_multiplier: float = Field(
        default=1.2,
        alias="RESILIENCE_GAS_MULTIPLIER",
        description="Multiplier applied to the gas budget per increase",
    )
    auto_nonce_refresh: bool = Field(
        default=True,
        alias="RESILIENCE_AUTO_NONCE_REFRESH",
        description="Refresh the nonce after nonce conflicts",
    )
    fallback_to_sponsored: bool = Field(
        default=False,
        alias="RESILIENCE_FALLBACK_TO_SPONSORED",
        description="Fall back to sponsored execution when gas cannot be paid",
    )
    fallback_paymaster_url: Optional[str] = Field(
        default=None,
        alias="RESILIENCE_FALLBACK_PAYMASTER_URL",
        description="Paymaster URL used for the sponsored fallback",
    )
    timeout_seconds: float = Field(
        default=60.0,
        alias="RESILIENCE_TIMEOUT_SECONDS",
        description="Deadline for a whole submission including retries",
    )

    @field_validator("backoff_strategy", mode="before")
    @classmethod
    def normalize_backoff_strategy(cls, v: str) -> str:
        """Lowercase the strategy name and reject unknown strategies."""
        value = str(v).strip().lower()
        if value not in VALID_BACKOFF_STRATEGIES:
            raise ValueError(
                f"backoff_strategy must be one of: {', '.join(VALID_BACKOFF_STRATEGIES)}"
            )
        return value

    @field_validator("fallback_paymaster_url", mode="before")
    @classmethod
    def empty_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v
