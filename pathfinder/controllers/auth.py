"""Authentication controller.

Owns the ``UserIdentity`` lifecycle: login and registration save it to the
credential store, logout clears it, and construction restores a saved
session without calling the server.
"""

from typing import TypeAlias

import structlog

from pathfinder.core.errors import ProjectionError
from pathfinder.gateway import operations
from pathfinder.gateway.base import GraphQLOperation, RemoteGateway
from pathfinder.projections.mappers import project_auth_session
from pathfinder.projections.records import AuthSession
from pathfinder.session.credential_store import CredentialStore, UserIdentity
from pathfinder.sync.result import Error, Idle, Loading, Success
from pathfinder.sync.state import ObservableState

logger = structlog.get_logger()

AuthState: TypeAlias = Idle | Loading | Success[AuthSession] | Error


class AuthController:
    """Login / register / logout.

    Attributes:
        auth_state: Idle, Loading, Success(AuthSession) or Error(message).
    """

    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        """Initialize and restore any saved session.

        Args:
            gateway: Gateway used for login and registration.
            credentials: Store the identity is saved to and cleared from.
        """
        self.gateway = gateway
        self.credentials = credentials
        self.auth_state: ObservableState[AuthState] = ObservableState(
            Idle(), name="auth"
        )
        self._restore_session()

    def _restore_session(self) -> None:
        identity = self.credentials.get_identity()
        if identity is None:
            logger.debug("no_saved_session")
            return
        # Name and email are not persisted with the session
        logger.info("session_restored", user_id=identity.id)
        self.auth_state.set(
            Success(
                AuthSession(
                    token=identity.token, user_id=identity.id, user_name="", user_email=""
                )
            )
        )

    @property
    def is_logged_in(self) -> bool:
        return self.credentials.get_identity() is not None

    async def _authenticate(
        self, operation: GraphQLOperation, field: str, failure_message: str
    ) -> AuthState:
        self.auth_state.set(Loading())
        result = await self.gateway.execute(operation)

        match result:
            case Success(value=data) if data.get(field) is not None:
                try:
                    session = project_auth_session(data[field])
                except ProjectionError as e:
                    logger.warning("auth_payload_malformed", operation=operation.name)
                    outcome: AuthState = Error(e.message)
                else:
                    self.credentials.save_identity(
                        UserIdentity(id=session.user_id, token=session.token)
                    )
                    logger.info("auth_succeeded", operation=operation.name)
                    outcome = Success(session)
            case Error():
                outcome = result
            case _:
                outcome = Error(failure_message)

        if isinstance(outcome, Error):
            logger.warning("auth_failed", operation=operation.name, error=outcome.message)
        self.auth_state.set(outcome)
        return outcome

    async def login(self, email: str, password: str) -> AuthState:
        logger.info("login_attempt", email=email)
        return await self._authenticate(
            operations.login(email, password), "login", "Login failed"
        )

    async def register(self, email: str, password: str, name: str) -> AuthState:
        logger.info("register_attempt", email=email)
        return await self._authenticate(
            operations.register(email, password, name), "register", "Registration failed"
        )

    def logout(self) -> None:
        self.credentials.clear()
        self.auth_state.set(Idle())

    def reset_state(self) -> None:
        self.auth_state.set(Idle())
