"""Home screen controller: trending skills from the public catalog."""

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_skills
from pathfinder.projections.records import SkillRecord
from pathfinder.sync.engine import EntitySpec, SyncController
from pathfinder.sync.result import RemoteResult

TRENDING_SKILLS_SPEC: EntitySpec[tuple[SkillRecord, ...]] = EntitySpec(
    name="trending_skills",
    build_fetch=lambda _identity: operations.get_skills(),
    select=lambda data: data.get("getSkills"),
    project=project_skills,
    not_found_message="Could not fetch skills.",
    requires_identity=False,
)


class HomeController(SyncController[tuple[SkillRecord, ...]]):
    """Trending skills. Needs no identity."""

    def __init__(self, gateway: RemoteGateway) -> None:
        super().__init__(TRENDING_SKILLS_SPEC, gateway)

    async def fetch_trending_skills(self) -> RemoteResult[tuple[SkillRecord, ...]]:
        return await self.fetch()
