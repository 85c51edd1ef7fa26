"""Submission engine configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import NetworkSettings

# Feature settings
from infrastructure.configuration.features import SubscriptionSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import ResilienceSettings


class Settings(BaseSettings):
    """Submission engine configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Chain networks (RPC endpoints, paymaster, contracts)
    - **Features**: Feature module configurations (subscriptions)
    - **Infrastructure**: Core engine configuration (resilience defaults)

    Environment Variables:
        PREFIX: Environment prefix for multi-tenant deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        rpc_url = settings.networks.BASE_RPC_URL
        max_retries = settings.resilience.max_retries

        if settings.is_production:
            ...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    networks: NetworkSettings

    # Feature settings
    subscriptions: SubscriptionSettings

    # Infrastructure settings
    resilience: ResilienceSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "networks": NetworkSettings,
            "subscriptions": SubscriptionSettings,
            "resilience": ResilienceSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
