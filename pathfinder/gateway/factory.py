"""Gateway factory functions.

Singleton pattern for the process-wide gateway instance.
"""

from pathfinder.gateway.base import RemoteGateway
from pathfinder.gateway.config import GatewayConfig
from pathfinder.gateway.http_adapter import HttpGraphQLGateway
from pathfinder.gateway.mock_adapter import MockGateway

_gateway: RemoteGateway | None = None


def get_gateway(config: GatewayConfig | None = None) -> RemoteGateway:
    """Get or create the gateway singleton.

    The first call fixes the configuration; later calls reuse the instance
    and its HTTP connection pool.

    Args:
        config: Optional gateway configuration. If None and no gateway
            exists, loads from settings.

    Returns:
        RemoteGateway instance.

    Raises:
        ValueError: If the configured gateway type is unknown.
    """
    global _gateway

    if _gateway is None:
        if config is None:
            config = GatewayConfig.from_settings()

        if config.gateway == "http":
            _gateway = HttpGraphQLGateway(config)
        elif config.gateway == "mock":
            _gateway = MockGateway()
        else:
            raise ValueError(f"Unknown gateway: {config.gateway}")

    return _gateway


def reset_gateway() -> None:
    """Reset the gateway singleton.

    Used in tests to ensure isolation between test cases.
    """
    global _gateway
    _gateway = None
