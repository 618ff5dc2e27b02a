"""Client configuration loaded from environment variables.

Settings for the GraphQL endpoint, the advisor chat endpoint, local storage,
logging, and the synchronization engine defaults. Uses pydantic-settings for
validation and .env file support.
"""

from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Production endpoint used by the mobile build
DEFAULT_GRAPHQL_URL = "https://backend.revvote.site/graphql"

# Local advisor server as seen from the Android emulator loopback
DEFAULT_CHAT_API_URL = "http://10.0.2.2:3000/"


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PATHFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote endpoints
    # "mock" serves scripted responses without touching the network
    gateway: Literal["http", "mock"] = "http"
    graphql_url: str = DEFAULT_GRAPHQL_URL
    chat_api_url: str = DEFAULT_CHAT_API_URL
    request_timeout_seconds: float = 30.0

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False

    # Local persisted state (credentials, preferences, chat history)
    data_dir: Path = Path.home() / ".pathfinder"

    # Synchronization engine defaults
    # last_issued_wins: monotonic request sequence, stale results dropped
    # last_resolved_wins: whichever response lands last overwrites state
    sync_ordering: Literal["last_issued_wins", "last_resolved_wins"] = (
        "last_issued_wins"
    )
    sync_guard_in_flight: bool = False

    @property
    def credentials_path(self) -> Path:
        """Key-value file holding the auth token and user id."""
        return self.data_dir / "auth_prefs.json"

    @property
    def preferences_path(self) -> Path:
        """Key-value file holding UI preferences (theme)."""
        return self.data_dir / "settings.json"

    @property
    def chat_history_path(self) -> Path:
        """Key-value file holding the advisor chat transcript."""
        return self.data_dir / "chat_history.json"

    @model_validator(mode="after")
    def check_endpoint_settings(self) -> "Settings":
        """Validate endpoint and timeout settings.

        Checks:
        - Request timeout must be positive (all environments)
        - GraphQL URL must use HTTPS in production
        """
        if self.request_timeout_seconds <= 0:
            msg = (
                "REQUEST_TIMEOUT_SECONDS must be positive. "
                f"Got: {self.request_timeout_seconds}"
            )
            raise ValueError(msg)

        if self.environment == "production" and not self.graphql_url.startswith(
            "https://"
        ):
            msg = (
                "GRAPHQL_URL must use https:// in production. "
                f"Got: {self.graphql_url}"
            )
            raise ValueError(msg)

        return self


settings = Settings()
