"""Roles screen controller.

Shows the user's current role followed by their desired roles, which come
from the career goals on the user aggregate.
"""

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_roles
from pathfinder.projections.records import RoleRecord
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import EntitySpec, SyncController
from pathfinder.sync.result import RemoteResult

USER_ROLES_SPEC: EntitySpec[tuple[RoleRecord, ...]] = EntitySpec(
    name="user_roles",
    build_fetch=lambda identity: operations.get_user_onboarding_data(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_roles,
    not_found_message="Could not fetch roles.",
)


class RolesController(SyncController[tuple[RoleRecord, ...]]):
    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        super().__init__(USER_ROLES_SPEC, gateway, credentials)

    async def fetch_user_roles(self) -> RemoteResult[tuple[RoleRecord, ...]]:
        return await self.fetch()
