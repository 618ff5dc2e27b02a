"""Session identity and local preferences."""

from pathfinder.session.credential_store import (
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
    UserIdentity,
)
from pathfinder.session.preferences import ThemePreference

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "InMemoryCredentialStore",
    "ThemePreference",
    "UserIdentity",
]
