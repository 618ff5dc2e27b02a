"""Abstract base class and types for the remote data gateway.

The gateway executes one named GraphQL operation and reports the outcome as a
``RemoteResult``. Adapters only implement ``send()``; the folding of transport
and server errors into ``Error(message)`` lives here so every adapter reports
failures identically.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from pathfinder.core.errors import ServerError, TransportError
from pathfinder.sync.result import Error, RemoteResult, Success

logger = structlog.get_logger()

# Used when the server reports an error entry without a message
_UNKNOWN_SERVER_ERROR = "Unknown error"


class OperationKind(Enum):
    """GraphQL operation type."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class GraphQLOperation:
    """A named GraphQL operation with its arguments.

    Attributes:
        name: Operation name (e.g., "GetUserById"). Sent as ``operationName``
            and used by the mock gateway to look up scripted responses.
        document: GraphQL source text.
        kind: Query or mutation.
        variables: Operation arguments. Absent optional arguments are omitted
            rather than sent as null.
    """

    name: str
    document: str
    kind: OperationKind = OperationKind.QUERY
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphQLResponse:
    """Decoded GraphQL response envelope.

    Attributes:
        data: The ``data`` object, or None when the server returned none.
        errors: The ``errors`` list (empty when absent).
    """

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_json(cls, body: Any) -> "GraphQLResponse":
        """Build a response from a decoded JSON body.

        Args:
            body: Decoded JSON object.

        Returns:
            GraphQLResponse instance.

        Raises:
            TransportError: If the body is not a JSON object.
        """
        if not isinstance(body, dict):
            raise TransportError("Malformed GraphQL response: expected a JSON object")
        data = body.get("data")
        errors = body.get("errors") or []
        return cls(
            data=data if isinstance(data, dict) else None,
            errors=[e for e in errors if isinstance(e, dict)],
        )

    def first_error_message(self) -> str | None:
        """Return the first server-reported error message, if any."""
        if not self.errors:
            return None
        return str(self.errors[0].get("message") or _UNKNOWN_SERVER_ERROR)


class RemoteGateway(ABC):
    """Abstract base class for GraphQL gateways.

    Subclasses implement ``send()``. Callers use ``execute()``, which never
    raises for transport or server failures.
    """

    @property
    @abstractmethod
    def gateway_name(self) -> str:
        """Return the adapter identifier (e.g., 'http', 'mock')."""
        ...

    @abstractmethod
    async def send(self, operation: GraphQLOperation) -> GraphQLResponse:
        """Send an operation over the transport.

        Args:
            operation: Operation to execute.

        Returns:
            Decoded response envelope (may carry ``errors``).

        Raises:
            TransportError: On network, HTTP status or decoding failure.
        """
        ...

    async def execute(self, operation: GraphQLOperation) -> RemoteResult[dict]:
        """Execute an operation once and fold the outcome into a result.

        No retry: a single failed attempt surfaces immediately.

        Args:
            operation: Operation to execute.

        Returns:
            ``Success(data)`` where data may contain null fields,
            or ``Error(message)`` for transport and server failures.
        """
        try:
            response = await self.send(operation)
            message = response.first_error_message()
            if message is not None:
                raise ServerError(message, errors=response.errors)
        except (TransportError, ServerError) as e:
            logger.warning(
                "gateway_call_failed",
                gateway=self.gateway_name,
                operation=operation.name,
                code=e.code,
                error=e.message,
            )
            return Error(e.message)

        return Success(response.data or {})

    async def aclose(self) -> None:
        """Release transport resources. Default is a no-op."""
        return None
