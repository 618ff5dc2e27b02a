"""Local credential store.

Resolves the active user identity that scopes every user-specific remote
call. Controllers receive the store in their constructor; nothing reads it
from module-level state.

Lifecycle:
    - save_identity(): on login/register success
    - get_identity(): by controllers before each scoped call
    - clear(): on logout
"""

from dataclasses import dataclass
from pathlib import Path

import structlog

from pathfinder.storage.kv_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)

logger = structlog.get_logger()

AUTH_TOKEN_KEY = "auth_token"
USER_ID_KEY = "user_id"


@dataclass(frozen=True)
class UserIdentity:
    """The logged-in user for this session.

    Attributes:
        id: Server-assigned user id.
        token: Opaque auth token returned by login/register.
    """

    id: str
    token: str


class CredentialStore:
    """Identity store on top of a key-value store.

    An identity exists only when both the token and the user id are present.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize with a backing key-value store.

        Args:
            store: Where ``auth_token`` and ``user_id`` are kept.
        """
        self._store = store

    def get_identity(self) -> UserIdentity | None:
        """Return the current identity, or None when no session exists."""
        user_id = self._store.get(USER_ID_KEY)
        token = self._store.get(AUTH_TOKEN_KEY)
        if not user_id or not token:
            return None
        return UserIdentity(id=str(user_id), token=str(token))

    def get_user_id(self) -> str | None:
        """Return the stored user id, if any, even without a token."""
        user_id = self._store.get(USER_ID_KEY)
        return str(user_id) if user_id else None

    def save_identity(self, identity: UserIdentity) -> None:
        """Persist a new identity, replacing any previous one.

        Args:
            identity: Identity from a successful login or registration.
        """
        logger.info("identity_saved", user_id=identity.id)
        self._store.put(AUTH_TOKEN_KEY, identity.token)
        self._store.put(USER_ID_KEY, identity.id)

    def clear(self) -> None:
        """Forget the current identity."""
        logger.info("identity_cleared")
        self._store.remove(AUTH_TOKEN_KEY, USER_ID_KEY)


class InMemoryCredentialStore(CredentialStore):
    """Credential store that lives for the process only."""

    def __init__(self, identity: UserIdentity | None = None) -> None:
        """Initialize, optionally with an already logged-in identity.

        Args:
            identity: Identity to start with.
        """
        super().__init__(InMemoryKeyValueStore())
        if identity is not None:
            self.save_identity(identity)


class FileCredentialStore(CredentialStore):
    """Credential store persisted as a JSON key-value file."""

    def __init__(self, path: Path) -> None:
        """Initialize with the credentials file path.

        Args:
            path: JSON file location (e.g., ``settings.credentials_path``).
        """
        super().__init__(JsonFileKeyValueStore(path))
