"""Unit tests for settings sections and the aggregator."""

import pytest
from pydantic import ValidationError

from infrastructure.configuration import (
    NetworkSettings,
    ResilienceSettings,
    Settings,
    SubscriptionSettings,
)
from infrastructure.services import get_settings


@pytest.mark.unit
class TestSettings:
    """Tests for the Settings aggregator."""

    def test_sections_are_instantiated(self):
        settings = Settings()

        assert isinstance(settings.networks, NetworkSettings)
        assert isinstance(settings.subscriptions, SubscriptionSettings)
        assert isinstance(settings.resilience, ResilienceSettings)

    def test_is_production_follows_prefix(self, monkeypatch):
        monkeypatch.setenv("PREFIX", "dev-")
        assert Settings().is_production is False

        monkeypatch.setenv("PREFIX", "")
        assert Settings().is_production is True

    def test_section_override(self):
        resilience = ResilienceSettings(RESILIENCE_MAX_RETRIES=7)

        settings = Settings(resilience=resilience)

        assert settings.resilience.max_retries == 7

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestNetworkSettings:
    """Tests for NetworkSettings."""

    def test_defaults(self):
        networks = NetworkSettings()

        assert networks.RPC_URLS == {
            8453: "https://mainnet.base.org",
            84532: "https://sepolia.base.org",
        }
        assert networks.PAYMASTER_URL is None
        assert networks.SPEND_PERMISSION_MANAGER_ADDRESS == (
            "0xf85210B21cC50302F477BA56686d2019dC9b67Ad"
        )

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BASE_RPC_URL", "https://rpc.example")
        monkeypatch.setenv("PAYMASTER_URL", "   ")

        networks = NetworkSettings()

        assert networks.RPC_URLS[8453] == "https://rpc.example"
        assert networks.PAYMASTER_URL is None


@pytest.mark.unit
class TestResilienceSettings:
    """Tests for ResilienceSettings."""

    def test_defaults(self):
        resilience = ResilienceSettings()

        assert resilience.max_retries == 3
        assert resilience.backoff_strategy == "exponential"
        assert resilience.jitter is True
        assert resilience.fallback_paymaster_url is None

    def test_strategy_is_normalized(self, monkeypatch):
        monkeypatch.setenv("RESILIENCE_BACKOFF_STRATEGY", " Fixed ")

        assert ResilienceSettings().backoff_strategy == "fixed"

    def test_unknown_strategy_rejected(self, monkeypatch):
        monkeypatch.setenv("RESILIENCE_BACKOFF_STRATEGY", "random")

        with pytest.raises(ValidationError, match="backoff_strategy must be one of"):
            ResilienceSettings()


@pytest.mark.unit
class TestSubscriptionSettings:
    """Tests for SubscriptionSettings."""

    def test_defaults(self):
        subscriptions = SubscriptionSettings()

        assert subscriptions.confirmation_timeout_seconds == 30.0
        assert subscriptions.default_testnet is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUBSCRIPTIONS_DEFAULT_TESTNET", "true")

        assert SubscriptionSettings().default_testnet is True
