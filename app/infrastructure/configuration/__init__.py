"""Infrastructure configuration module - public API.

Centralized configuration for the submission engine using Pydantic
BaseSettings, organized by domain (integrations, features, infrastructure).

Exports:
    Settings: Main settings class (for testing/overrides)
    NetworkSettings: Chain network settings
    SubscriptionSettings: Subscriptions feature settings
    ResilienceSettings: Retry/backoff default settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    paymaster = settings.networks.PAYMASTER_URL
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.integrations import NetworkSettings
from infrastructure.configuration.features import SubscriptionSettings
from infrastructure.configuration.infrastructure import ResilienceSettings

__all__ = [
    "Settings",
    "NetworkSettings",
    "SubscriptionSettings",
    "ResilienceSettings",
]
