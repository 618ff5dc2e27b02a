"""REST client for the advisor chat service.

The advisor is not part of the GraphQL API; it is a single ``POST /chat``
endpoint on a separate service. Failures are raised as ``TransportError``.
"""

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from pathfinder.core.errors import TransportError
from pathfinder.gateway.http_adapter import classify_httpx_error
from pathfinder.schemas.chat import ChatRequest, ChatResponse

if TYPE_CHECKING:
    from pathfinder.gateway.config import GatewayConfig

logger = structlog.get_logger()

CHAT_PATH = "chat"


class ChatApiClient:
    """Sends prompts to the advisor service.

    Attributes:
        config: Supplies ``chat_api_url`` and the timeout.
    """

    def __init__(
        self,
        config: "GatewayConfig",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.chat_api_url,
                timeout=self.config.timeout_seconds,
                headers=self.config.headers,
            )
        return self._client

    async def send_message(self, request: ChatRequest) -> ChatResponse:
        """Send one prompt with its conversation context.

        Args:
            request: User id, prompt and prior turns.

        Returns:
            The advisor's reply.

        Raises:
            TransportError: On connection failure, timeout, non-2xx status or
                an unexpected response body.
        """
        logger.debug("chat_request", user_id=request.user_id, turns=len(request.history))
        try:
            resp = await self._get_client().post(
                CHAT_PATH, json=request.model_dump(by_alias=True)
            )
            resp.raise_for_status()
            return ChatResponse.model_validate(resp.json())
        except httpx.HTTPError as e:
            raise classify_httpx_error(e) from e
        except ValidationError as e:
            raise TransportError(f"Unexpected chat response: {e.error_count()} errors") from e
        except ValueError as e:
            raise TransportError(f"Invalid JSON in chat response: {e}") from e

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
