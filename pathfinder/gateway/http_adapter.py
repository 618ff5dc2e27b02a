"""GraphQL gateway over HTTP.

Posts ``{"query", "variables", "operationName"}`` to the configured endpoint
with httpx. One request per call; failures are classified into
``TransportError`` and folded into ``Error(message)`` by the base class.
"""

from typing import TYPE_CHECKING

import httpx
import structlog

from pathfinder.core.errors import TransportError
from pathfinder.gateway.base import GraphQLOperation, GraphQLResponse, RemoteGateway

if TYPE_CHECKING:
    from pathfinder.gateway.config import GatewayConfig

logger = structlog.get_logger()


def classify_httpx_error(error: Exception) -> TransportError:
    """Map httpx exceptions to a TransportError.

    Returns the error (does not raise). The caller raises via
    ``raise classify_httpx_error(e) from e``.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return TransportError(
            f"HTTP {error.response.status_code} from {error.request.url}"
        )
    if isinstance(error, httpx.TimeoutException):
        return TransportError(f"Request timed out: {error}")
    return TransportError(str(error) or type(error).__name__)


class HttpGraphQLGateway(RemoteGateway):
    """Gateway backed by an ``httpx.AsyncClient``.

    The client is created lazily and reused across calls. Pass ``client`` to
    inject a preconfigured one (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: "GatewayConfig",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with gateway configuration.

        Args:
            config: Endpoint URL, timeout and extra headers.
            client: Optional preconfigured client.
        """
        self.config = config
        self._client = client

    @property
    def gateway_name(self) -> str:
        """Return 'http'."""
        return "http"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                headers=self.config.headers,
            )
        return self._client

    async def send(self, operation: GraphQLOperation) -> GraphQLResponse:
        """POST the operation and decode the response envelope.

        Args:
            operation: Operation to execute.

        Returns:
            Decoded response envelope.

        Raises:
            TransportError: On connection failure, timeout, non-2xx status or
                a body that is not a JSON object.
        """
        payload = {
            "query": operation.document,
            "variables": operation.variables,
            "operationName": operation.name,
        }
        logger.debug(
            "gateway_request",
            operation=operation.name,
            kind=operation.kind.value,
            url=self.config.graphql_url,
        )
        try:
            resp = await self._get_client().post(self.config.graphql_url, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            raise classify_httpx_error(e) from e
        except ValueError as e:
            raise TransportError(f"Invalid JSON in GraphQL response: {e}") from e

        return GraphQLResponse.from_json(body)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
