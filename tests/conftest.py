"""Shared fixtures and payload builders for client tests.

Controllers are tested against MockGateway with scripted GraphQL bodies; no
network is touched.
"""

from collections.abc import Iterator
from typing import Any

import pytest

from pathfinder.gateway.factory import reset_gateway
from pathfinder.gateway.mock_adapter import MockGateway
from pathfinder.session.credential_store import InMemoryCredentialStore, UserIdentity

# Test identity (consistent across tests for predictable operation variables)
TEST_USER_ID = "user-1"
TEST_TOKEN = "token-abc"  # nosec B105


def user_skill(
    row_id: str, name: str | None = "Python", level: str | None = "Advanced"
) -> dict[str, Any]:
    """Raw ``skills[]`` entry as returned by getUserById."""
    skill = None if name is None else {"id": f"skill-{name}", "name": name, "category": "Tech"}
    return {"id": row_id, "level": level, "skill": skill}


def user_body(**fields: Any) -> dict[str, Any]:
    """GraphQL body whose ``getUserById`` holds ``fields`` on top of an id."""
    user = {"id": TEST_USER_ID, "name": "Ada", "email": "ada@example.com"}
    user.update(fields)
    return {"data": {"getUserById": user}}


def skills_body(*skills: dict[str, Any] | None) -> dict[str, Any]:
    return {"data": {"getSkills": list(skills)}}


def error_body(message: str) -> dict[str, Any]:
    return {"data": None, "errors": [{"message": message}]}


@pytest.fixture(autouse=True)
def _reset_gateway_singleton() -> Iterator[None]:
    """Reset the gateway singleton around every test."""
    reset_gateway()
    yield
    reset_gateway()


@pytest.fixture
def gateway() -> MockGateway:
    return MockGateway()


@pytest.fixture
def identity() -> UserIdentity:
    return UserIdentity(id=TEST_USER_ID, token=TEST_TOKEN)


@pytest.fixture
def credentials(identity: UserIdentity) -> InMemoryCredentialStore:
    """Credential store with a logged-in user."""
    return InMemoryCredentialStore(identity)


@pytest.fixture
def anonymous() -> InMemoryCredentialStore:
    """Credential store with no session."""
    return InMemoryCredentialStore()
