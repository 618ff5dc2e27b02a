"""Gateway configuration.

Plain dataclass consumed by the transport adapters, built from the
application settings.
"""

from dataclasses import dataclass, field

from pathfinder.core.config import (
    DEFAULT_CHAT_API_URL,
    DEFAULT_GRAPHQL_URL,
    Settings,
    settings,
)


@dataclass
class GatewayConfig:
    """Transport configuration for the GraphQL and chat endpoints.

    Attributes:
        gateway: Which adapter the factory builds ("http" or "mock").
        graphql_url: GraphQL endpoint URL.
        chat_api_url: Base URL of the advisor REST service.
        timeout_seconds: Per-request timeout.
        headers: Extra headers sent with every request.
    """

    gateway: str = "http"
    graphql_url: str = DEFAULT_GRAPHQL_URL
    chat_api_url: str = DEFAULT_CHAT_API_URL
    timeout_seconds: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "GatewayConfig":
        """Build a gateway configuration from application settings.

        Args:
            config: Settings to read. Defaults to the module-level settings.

        Returns:
            GatewayConfig instance.
        """
        config = config or settings
        return cls(
            gateway=config.gateway,
            graphql_url=config.graphql_url,
            chat_api_url=config.chat_api_url,
            timeout_seconds=config.request_timeout_seconds,
        )
