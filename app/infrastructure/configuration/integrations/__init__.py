"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.networks import NetworkSettings

__all__ = [
    "NetworkSettings",
]
