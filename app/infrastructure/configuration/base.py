"""Shared base classes for settings modules.

Every settings section reads from the process environment and an optional
``.env`` file. Names are case-sensitive and unknown keys are ignored so the
same ``.env`` can be shared by every section.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Base class for settings describing external collaborators.

    Used for the chain networks the engine talks to (RPC endpoints,
    paymaster, contract addresses).
    """

    model_config = _SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Base class for feature module settings (e.g. subscriptions)."""

    model_config = _SECTION_CONFIG


class InfrastructureSettings(BaseSettings):
    """Base class for infrastructure-level settings.

    Infrastructure settings control core engine behavior such as the
    resilience (retry/backoff) defaults applied to every submission.
    """

    model_config = _SECTION_CONFIG
