"""Factory for resilience configurations seeded from settings."""

from typing import Any

import structlog

from infrastructure.resilience.retry.config import ResilienceConfig
from infrastructure.services.providers import get_settings

logger = structlog.get_logger()


def create_resilience_config(**overrides: Any) -> ResilienceConfig:
    """Build a ``ResilienceConfig`` from ``RESILIENCE_*`` settings.

    Keyword arguments override individual fields. The sponsored fallback
    uses ``PAYMASTER_URL`` when no dedicated fallback paymaster is set.

    Raises:
        InvalidResilienceConfigError: If the merged values are out of range.

    Examples:
        >>> config = create_resilience_config()
        >>> config = create_resilience_config(max_retries=0, jitter=False)
    """
    settings = get_settings()
    resilience = settings.resilience

    values: dict[str, Any] = {
        "max_retries": resilience.max_retries,
        "backoff_strategy": resilience.backoff_strategy,
        "base_delay_seconds": resilience.base_delay_seconds,
        "max_delay_seconds": resilience.max_delay_seconds,
        "jitter": resilience.jitter,
        "auto_gas_adjust": resilience.auto_gas_adjust,
        "gas_multiplier": resilience.gas_multiplier,
        "auto_nonce_refresh": resilience.auto_nonce_refresh,
        "fallback_to_sponsored": resilience.fallback_to_sponsored,
        "fallback_paymaster_url": resilience.fallback_paymaster_url
        or settings.networks.PAYMASTER_URL,
        "timeout_seconds": resilience.timeout_seconds,
    }
    values.update(overrides)

    logger.debug(
        "resilience_config_created",
        overrides=sorted(overrides),
        max_retries=values["max_retries"],
    )
    return ResilienceConfig(**values)
