"""Tests for client configuration.

Settings for the GraphQL and chat endpoints, local storage paths, logging
and synchronization engine defaults. Tests cover defaults, env var loading,
and endpoint validation.
"""

from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from pathfinder.core.config import DEFAULT_CHAT_API_URL, DEFAULT_GRAPHQL_URL, Settings
from pathfinder.core.logging import configure_logging
from pathfinder.gateway.config import GatewayConfig

_PRODUCTION = "production"


class TestSettingsDefaults:
    """Defaults match the production mobile build."""

    def test_graphql_url_defaults_to_production_backend(self):
        """GraphQL endpoint defaults to the hosted backend over HTTPS."""
        s = Settings()
        assert s.graphql_url == "https://backend.revvote.site/graphql"

    def test_sync_defaults(self):
        """Last-issued-wins ordering with no in-flight guard."""
        s = Settings()
        assert s.sync_ordering == "last_issued_wins"
        assert s.sync_guard_in_flight is False

    def test_storage_paths_live_under_data_dir(self, tmp_path: Path):
        """Credential, preference and chat files are derived from data_dir."""
        s = Settings(data_dir=tmp_path)
        assert s.credentials_path == tmp_path / "auth_prefs.json"
        assert s.preferences_path == tmp_path / "settings.json"
        assert s.chat_history_path == tmp_path / "chat_history.json"


class TestSettingsFromEnv:
    """Environment variables use the PATHFINDER_ prefix."""

    def test_reads_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch):
        """PATHFINDER_* variables override defaults."""
        monkeypatch.setenv("PATHFINDER_SYNC_ORDERING", "last_resolved_wins")
        monkeypatch.setenv("PATHFINDER_SYNC_GUARD_IN_FLIGHT", "true")
        monkeypatch.setenv("PATHFINDER_REQUEST_TIMEOUT_SECONDS", "5")

        s = Settings()

        assert s.sync_ordering == "last_resolved_wins"
        assert s.sync_guard_in_flight is True
        assert s.request_timeout_seconds == 5.0

    def test_rejects_unknown_ordering(self, monkeypatch: pytest.MonkeyPatch):
        """Only the two ordering policies are accepted."""
        monkeypatch.setenv("PATHFINDER_SYNC_ORDERING", "first_wins")
        with pytest.raises(ValidationError):
            Settings()


class TestEndpointValidation:
    """Model validator for timeout and endpoint scheme."""

    def test_rejects_non_positive_timeout(self):
        """A zero timeout is rejected in every environment."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(request_timeout_seconds=0)
        assert "REQUEST_TIMEOUT_SECONDS must be positive" in str(exc_info.value)

    def test_rejects_plain_http_in_production(self):
        """Production requires an HTTPS GraphQL endpoint."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment=_PRODUCTION, graphql_url="http://localhost:4000/graphql")
        assert "GRAPHQL_URL must use https://" in str(exc_info.value)

    def test_allows_plain_http_in_development(self):
        """Local backends over HTTP are fine outside production."""
        s = Settings(graphql_url="http://localhost:4000/graphql")
        assert s.graphql_url.startswith("http://")


class TestGatewayConfigFromSettings:
    """GatewayConfig.from_settings() copies endpoint settings."""

    def test_copies_endpoints_and_timeout(self):
        """from_settings() should copy the endpoints and timeout."""
        s = Settings(
            graphql_url="https://example.test/graphql",
            chat_api_url="https://chat.example.test/",
            request_timeout_seconds=7,
        )
        config = GatewayConfig.from_settings(s)

        assert config.gateway == "http"
        assert config.graphql_url == "https://example.test/graphql"
        assert config.chat_api_url == "https://chat.example.test/"
        assert config.timeout_seconds == 7

    def test_copies_gateway_type(self):
        """from_settings() should carry the gateway type through."""
        assert GatewayConfig.from_settings(Settings(gateway="mock")).gateway == "mock"

    def test_reads_gateway_type_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """PATHFINDER_GATEWAY should select the adapter."""
        monkeypatch.setenv("PATHFINDER_GATEWAY", "mock")
        assert GatewayConfig.from_settings(Settings()).gateway == "mock"

    def test_rejects_unknown_gateway_type(self):
        """Only the http and mock adapters are accepted."""
        with pytest.raises(ValidationError):
            Settings(gateway="carrier-pigeon")

    def test_defaults_match_settings_defaults(self):
        """A bare GatewayConfig should use the same endpoints as Settings."""
        config = GatewayConfig()
        assert config.graphql_url == DEFAULT_GRAPHQL_URL == Settings().graphql_url
        assert config.chat_api_url == DEFAULT_CHAT_API_URL == Settings().chat_api_url


class TestConfigureLogging:
    """configure_logging() can be called repeatedly with either renderer."""

    @pytest.mark.parametrize("log_json", [False, True])
    def test_configures_structlog(self, log_json: bool):
        """configure_logging() should leave structlog configured."""
        configure_logging(Settings(log_level="debug", log_json=log_json))
        assert structlog.is_configured()
        structlog.reset_defaults()
