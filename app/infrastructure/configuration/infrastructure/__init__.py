"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.resilience import ResilienceSettings

__all__ = [
    "ResilienceSettings",
]
