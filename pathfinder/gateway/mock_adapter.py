"""Mock gateway for testing.

MockGateway enables controller tests without a GraphQL server. Responses are
scripted per operation name; every call is recorded.
"""

import asyncio
from typing import Any

from pathfinder.core.errors import SyncError, TransportError
from pathfinder.gateway.base import GraphQLOperation, GraphQLResponse, RemoteGateway

# A scripted response is either a JSON body ({"data": ..., "errors": ...})
# or an exception to raise as a transport failure.
ScriptedResponse = dict[str, Any] | Exception


class MockGateway(RemoteGateway):
    """Mock gateway for testing.

    Attributes:
        responses: Scripted responses keyed by operation name. When several
            are queued, each call consumes one; the last one repeats.
        calls: Every operation sent, in call order.
    """

    def __init__(self, responses: dict[str, ScriptedResponse] | None = None) -> None:
        """Initialize with optional pre-configured responses.

        Args:
            responses: Dict mapping operation name to a JSON body or an
                exception. Operations without a script return ``{"data": {}}``.
        """
        self.responses: dict[str, list[ScriptedResponse]] = {
            name: [response] for name, response in (responses or {}).items()
        }
        self.calls: list[GraphQLOperation] = []
        self._gates: dict[str, list[asyncio.Event]] = {}

    @property
    def gateway_name(self) -> str:
        """Return 'mock' for testing."""
        return "mock"

    @property
    def call_names(self) -> list[str]:
        """Operation names in call order."""
        return [op.name for op in self.calls]

    def set_response(self, name: str, response: ScriptedResponse) -> None:
        """Set or replace the response for an operation.

        Args:
            name: Operation name (e.g., "GetSkills").
            response: JSON body or exception.
        """
        self.responses[name] = [response]

    def queue_responses(self, name: str, *responses: ScriptedResponse) -> None:
        """Queue responses consumed one per call, in order.

        Args:
            name: Operation name.
            *responses: JSON bodies or exceptions.
        """
        self.responses[name] = list(responses)

    def hold(self, name: str) -> asyncio.Event:
        """Block the next call to ``name`` until the returned event is set.

        The response for the held call is chosen when the call starts, not
        when it is released.

        Args:
            name: Operation name.

        Returns:
            Event the test sets to release the call.
        """
        gate = asyncio.Event()
        self._gates.setdefault(name, []).append(gate)
        return gate

    def _next_response(self, name: str) -> ScriptedResponse:
        queue = self.responses.get(name)
        if not queue:
            return {"data": {}}
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    async def send(self, operation: GraphQLOperation) -> GraphQLResponse:
        """Record the call and return the scripted response.

        Args:
            operation: Operation to execute.

        Returns:
            GraphQLResponse built from the scripted body.

        Raises:
            TransportError: If the scripted response is an exception.
        """
        self.calls.append(operation)
        response = self._next_response(operation.name)

        gates = self._gates.get(operation.name)
        if gates:
            await gates.pop(0).wait()

        if isinstance(response, SyncError):
            raise response
        if isinstance(response, Exception):
            raise TransportError(str(response)) from response
        return GraphQLResponse.from_json(response)

    def assert_called_with_operation(self, name: str) -> None:
        """Test helper to verify an operation was sent.

        Args:
            name: The operation name that should have been sent.

        Raises:
            AssertionError: If the operation was not sent.
        """
        assert name in self.call_names, f"Expected {name}, got {self.call_names}"

    def assert_not_called(self) -> None:
        """Test helper to verify no operation was sent."""
        assert not self.calls, f"Expected no calls, got {self.call_names}"
