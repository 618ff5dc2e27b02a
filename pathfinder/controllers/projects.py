"""Projects screen controller (read-only)."""

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_projects
from pathfinder.projections.records import ProjectRecord
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import EntitySpec, SyncController
from pathfinder.sync.result import RemoteResult

USER_PROJECTS_SPEC: EntitySpec[tuple[ProjectRecord, ...]] = EntitySpec(
    name="user_projects",
    build_fetch=lambda identity: operations.get_user_onboarding_data(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_projects,
    not_found_message="Could not fetch projects.",
)


class ProjectsController(SyncController[tuple[ProjectRecord, ...]]):
    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        super().__init__(USER_PROJECTS_SPEC, gateway, credentials)

    async def fetch_user_projects(self) -> RemoteResult[tuple[ProjectRecord, ...]]:
        return await self.fetch()
