import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.operations`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.resilience.retry import ResilienceConfig, RetryOrchestrator
from infrastructure.services.providers import get_settings
from tests.factories.subscriptions import (
    make_authorization,
    make_network_client,
    make_spend_state,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_sleep():
    """Awaitable sleep that records delays instead of waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def orchestrator(fake_sleep):
    """RetryOrchestrator with instant backoff waits."""
    return RetryOrchestrator(sleep=fake_sleep)


@pytest.fixture
def resilience_config_factory():
    """Factory for deterministic ResilienceConfig instances (no jitter)."""

    def _factory(**overrides) -> ResilienceConfig:
        values = {"jitter": False, "base_delay_seconds": 1.0, "timeout_seconds": 60.0}
        values.update(overrides)
        return ResilienceConfig(**values)

    return _factory


@pytest.fixture
def authorization_factory():
    return make_authorization


@pytest.fixture
def spend_state_factory():
    return make_spend_state


@pytest.fixture
def network_client_factory():
    return make_network_client
