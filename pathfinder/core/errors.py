"""Synchronization error taxonomy.

Every failure a controller can observe maps to one of these classes. Adapters
and projections raise them; the gateway and the sync engine fold them into an
``Error(message)`` result so the presentation layer only ever sees a message
string. ``PolicyViolationError`` is the exception: it signals a programming
mistake and propagates to the caller.
"""

__all__ = [
    "SyncError",
    "TransportError",
    "ServerError",
    "NotFoundError",
    "NotLoggedInError",
    "ProjectionError",
    "PolicyViolationError",
]


class SyncError(Exception):
    """Base class for synchronization errors.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable message shown to the user.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class TransportError(SyncError):
    """Network or HTTP failure during a gateway call.

    Covers connection errors, timeouts, non-2xx responses and bodies that
    are not valid JSON. The message is the underlying exception text.
    """

    def __init__(self, message: str) -> None:
        super().__init__(code="TRANSPORT_ERROR", message=message)


class ServerError(SyncError):
    """The server answered with a non-empty ``errors`` list.

    Only the first reported message is surfaced; the rest are kept for
    logging.
    """

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(code="SERVER_ERROR", message=message)
        self.errors = errors or []


class NotFoundError(SyncError):
    """The call succeeded but the expected entity is absent."""

    def __init__(self, message: str) -> None:
        super().__init__(code="NOT_FOUND", message=message)


class NotLoggedInError(SyncError):
    """No user identity is available for an identity-scoped call.

    Raised before the gateway is touched.
    """

    def __init__(self, message: str = "User not logged in.") -> None:
        super().__init__(code="NOT_LOGGED_IN", message=message)


class ProjectionError(SyncError):
    """A structurally required field is missing from a remote payload."""

    def __init__(self, entity: str, detail: str) -> None:
        super().__init__(
            code="MALFORMED_PAYLOAD",
            message=f"Malformed {entity} data: {detail}",
        )
        self.entity = entity


class PolicyViolationError(SyncError):
    """A controller was asked to do something its policy forbids.

    E.g. calling ``mutate_remote`` on a local-only collection.
    """

    def __init__(self, message: str) -> None:
        super().__init__(code="POLICY_VIOLATION", message=message)
