"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.subscriptions import SubscriptionSettings

__all__ = [
    "SubscriptionSettings",
]
