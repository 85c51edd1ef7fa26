"""
Factory functions for application-scoped singletons.
"""

from functools import lru_cache

from infrastructure.configuration import Settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Tests that need different values call ``get_settings.cache_clear()`` or
    construct ``Settings`` directly.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()
