"""Skills screen controller.

User skills follow PERSIST_THEN_REFETCH: add/remove persist remotely and the
list is then reloaded, so client-temporary rows never outlive a refresh. The
skill catalog backs the add-skill search and is loaded separately.
"""

from typing import Any

import structlog

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_skills, project_user_skills
from pathfinder.projections.records import PROFICIENCY_LEVELS, SkillRecord, UserSkillRecord
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import CollectionController, EntitySpec, SyncController
from pathfinder.sync.result import Error, RemoteResult
from pathfinder.sync.state import ObservableState

logger = structlog.get_logger()

USER_SKILLS_SPEC: EntitySpec[tuple[UserSkillRecord, ...]] = EntitySpec(
    name="user_skills",
    build_fetch=lambda identity: operations.get_user_by_id(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_user_skills,
    not_found_message="Could not fetch skills.",
)

SKILL_CATALOG_SPEC: EntitySpec[tuple[SkillRecord, ...]] = EntitySpec(
    name="skill_catalog",
    build_fetch=lambda _identity: operations.get_skills(),
    select=lambda data: data.get("getSkills"),
    project=project_skills,
    not_found_message="Could not fetch skills.",
    requires_identity=False,
)


def filter_by_name(items: tuple[Any, ...], query: str) -> tuple[Any, ...]:
    """Case-insensitive substring match on ``item.name``.

    A blank query returns every item.
    """
    needle = query.strip().casefold()
    if not needle:
        return items
    return tuple(item for item in items if needle in item.name.casefold())


def _blank_skill_row(temporary_id: str) -> UserSkillRecord:
    return UserSkillRecord(user_skill_id=temporary_id, skill_id="", name="", level="")


class SkillsController:
    """User skills plus the catalog used by the add-skill dialog.

    Attributes:
        user_skills: Collection controller for the user's skills.
        catalog: Controller for the full skill catalog.
        search_query: Current add-skill search text.
    """

    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        self.user_skills: CollectionController[UserSkillRecord] = CollectionController(
            USER_SKILLS_SPEC,
            gateway,
            credentials,
            identity_of=lambda row: row.user_skill_id,
            placeholder=_blank_skill_row,
        )
        self.catalog: SyncController[tuple[SkillRecord, ...]] = SyncController(
            SKILL_CATALOG_SPEC, gateway
        )
        self.search_query: ObservableState[str] = ObservableState("", name="skill_search")

    @property
    def state(self) -> ObservableState[RemoteResult[tuple[UserSkillRecord, ...]]]:
        return self.user_skills.state

    @property
    def all_skills(self) -> tuple[SkillRecord, ...]:
        return self.catalog.value or ()

    @property
    def filtered_skills(self) -> tuple[SkillRecord, ...]:
        return filter_by_name(self.all_skills, self.search_query.value)

    def on_search_query_change(self, query: str) -> None:
        self.search_query.set(query)

    async def fetch_user_skills(self) -> RemoteResult[tuple[UserSkillRecord, ...]]:
        return await self.user_skills.fetch()

    async def fetch_all_skills(self) -> RemoteResult[tuple[SkillRecord, ...]]:
        return await self.catalog.fetch()

    async def add_user_skill(self, skill_id: str, level: str) -> RemoteResult[dict]:
        """Persist a new user skill, then reload the list.

        Args:
            skill_id: Catalog skill id.
            level: Proficiency level (one of ``PROFICIENCY_LEVELS``).

        Returns:
            The mutation result, or Error without a remote call when
            ``level`` is not a known proficiency level.
        """
        if level not in PROFICIENCY_LEVELS:
            logger.warning("unknown_proficiency_level", skill_id=skill_id, level=level)
            return Error(f"Unknown proficiency level: {level}")
        logger.info("add_user_skill", skill_id=skill_id, level=level)
        return await self.user_skills.mutate_remote(
            lambda identity: operations.add_user_skill(identity.id, skill_id, level),
            not_logged_in_message="Cannot add skill, user not logged in",
        )

    async def remove_user_skill(self, user_skill_id: str) -> RemoteResult[dict]:
        """Remove a user skill by its row id, then reload the list."""
        logger.info("remove_user_skill", user_skill_id=user_skill_id)
        return await self.user_skills.mutate_remote(
            lambda _identity: operations.remove_user_skill(user_skill_id),
            not_logged_in_message="Cannot remove skill, user not logged in",
        )
