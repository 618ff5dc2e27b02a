"""Remote data gateway.

Exports:
    RemoteGateway base class and operation/response types
    GatewayConfig for configuration
    HTTP and mock adapters
    ChatApiClient for the advisor REST service
    Factory functions for the gateway instance
"""

from pathfinder.gateway.base import (
    GraphQLOperation,
    GraphQLResponse,
    OperationKind,
    RemoteGateway,
)
from pathfinder.gateway.chat_client import ChatApiClient
from pathfinder.gateway.config import GatewayConfig
from pathfinder.gateway.factory import get_gateway, reset_gateway
from pathfinder.gateway.http_adapter import HttpGraphQLGateway
from pathfinder.gateway.mock_adapter import MockGateway

__all__ = [
    # Types
    "GraphQLOperation",
    "GraphQLResponse",
    "OperationKind",
    "RemoteGateway",
    # Config
    "GatewayConfig",
    # Adapters
    "HttpGraphQLGateway",
    "MockGateway",
    "ChatApiClient",
    # Factory
    "get_gateway",
    "reset_gateway",
]
