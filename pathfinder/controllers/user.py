"""Current-user controller."""

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_user
from pathfinder.projections.records import UserRecord
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import EntitySpec, SyncController
from pathfinder.sync.result import RemoteResult

CURRENT_USER_SPEC: EntitySpec[UserRecord] = EntitySpec(
    name="current_user",
    build_fetch=lambda identity: operations.get_user_by_id(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_user,
    not_found_message="User not found",
    not_logged_in_message="User not logged in",
)


class UserController(SyncController[UserRecord]):
    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        super().__init__(CURRENT_USER_SPEC, gateway, credentials)

    async def fetch_current_user(self) -> RemoteResult[UserRecord]:
        return await self.fetch()
