"""Skill detail controller: description, related roles and courses by name."""

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_skill_detail
from pathfinder.projections.records import SkillDetailRecord
from pathfinder.sync.engine import EntitySpec, SyncController
from pathfinder.sync.result import RemoteResult

SKILL_DETAIL_SPEC: EntitySpec[SkillDetailRecord] = EntitySpec(
    name="skill_detail",
    build_fetch=lambda _identity, name: operations.get_skill_details_by_name(name),
    select=lambda data: data.get("getSkillByName"),
    project=project_skill_detail,
    not_found_message="Skill not found.",
    requires_identity=False,
)


class SkillDetailController(SyncController[SkillDetailRecord]):
    def __init__(self, gateway: RemoteGateway) -> None:
        super().__init__(SKILL_DETAIL_SPEC, gateway)

    async def fetch_skill_details(self, skill_name: str) -> RemoteResult[SkillDetailRecord]:
        """Load the detail for ``skill_name`` (matched by the server)."""
        return await self.fetch(skill_name)
