"""Subscriptions module feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class SubscriptionSettings(FeatureSettings):
    """Configuration for recurring charges against spend permissions.

    Environment Variables:
        SUBSCRIPTIONS_CONFIRMATION_TIMEOUT_SECONDS: How long a single charge
            waits for its receipt (default: 30s)
        SUBSCRIPTIONS_DEFAULT_TESTNET: Expect Base Sepolia subscriptions when
            the caller does not say which network it expects (default: False)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.subscriptions.default_testnet:
            ...
        ```
    """

    confirmation_timeout_seconds: float = Field(
        default=30.0,
        alias="SUBSCRIPTIONS_CONFIRMATION_TIMEOUT_SECONDS",
        description="Receipt wait per charge attempt (seconds)",
    )
    default_testnet: bool = Field(
        default=False,
        alias="SUBSCRIPTIONS_DEFAULT_TESTNET",
        description="Expect testnet subscriptions unless told otherwise",
    )
