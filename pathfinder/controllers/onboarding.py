"""Onboarding flow controller.

One aggregate spanning the onboarding screens (basic info, skills, career
goals, projects, final review). Everything is loaded by a single
``GetUserOnboardingData`` query.

Edit policies:
    - Skill and career-goal additions/removals that go through the remote
      API are PERSIST_THEN_REFETCH with a visible Loading state: the whole
      aggregate is reloaded and ``ui_state`` ends in ``Success("Data Loaded")``.
    - Skill rows and project rows edited inline are LOCAL_ONLY until submit.
    - Basic info and the final review are saved as forms.
"""

import structlog

from pathfinder.controllers.skills import SKILL_CATALOG_SPEC, filter_by_name
from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import (
    ONBOARDING_DEFAULT_LEVEL,
    project_career_paths,
    project_onboarding,
)
from pathfinder.projections.records import (
    CareerGoalRecord,
    CareerPathRecord,
    OnboardingSnapshot,
    ProjectRecord,
    SkillRecord,
    UserSkillRecord,
)
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import (
    EntitySpec,
    FormSubmitter,
    LocalCollection,
    SyncController,
)
from pathfinder.sync.result import Error, Idle, Loading, RemoteResult, Success, UiState
from pathfinder.sync.state import ObservableState

logger = structlog.get_logger()

DATA_LOADED = "Data Loaded"
BASIC_INFO_SAVED = "Basic Info Saved!"
PROFILE_SUBMITTED = "Profile Submitted Successfully!"

ONBOARDING_SPEC: EntitySpec[OnboardingSnapshot] = EntitySpec(
    name="onboarding",
    build_fetch=lambda identity: operations.get_user_onboarding_data(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_onboarding,
    not_found_message="User not found",
    not_logged_in_message="User not logged in",
    show_loading_on_mutation=True,
)

CAREER_PATH_CATALOG_SPEC: EntitySpec[tuple[CareerPathRecord, ...]] = EntitySpec(
    name="career_path_catalog",
    build_fetch=lambda _identity: operations.get_career_paths(),
    select=lambda data: data.get("getCareerPaths"),
    project=project_career_paths,
    not_found_message="Failed to load career paths",
    requires_identity=False,
)


def _blank_skill_row(temporary_id: str) -> UserSkillRecord:
    return UserSkillRecord(
        user_skill_id=temporary_id, skill_id="", name="", level=ONBOARDING_DEFAULT_LEVEL
    )


def _blank_project_row(temporary_id: str) -> ProjectRecord:
    return ProjectRecord(
        project_id=temporary_id, name="", description="", github_link="", status=""
    )


class OnboardingController:
    """State and operations for the onboarding flow.

    Attributes:
        ui_state: Idle / Loading / Success(message) / Error(message) shared by
            every step of the flow.
        user_skills: Inline-editable skill rows (local until submit).
        projects: Inline-editable project rows (local until submit).
        user_career_goals: Career goals as last loaded from the server.
        all_skills, all_career_paths: Catalogs backing the search boxes.
    """

    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        # Basic info
        self.name: ObservableState[str] = ObservableState("", name="onboarding.name")
        self.email: ObservableState[str] = ObservableState("", name="onboarding.email")
        self.current_role: ObservableState[str] = ObservableState(
            "", name="onboarding.current_role"
        )
        self.years_experience: ObservableState[int] = ObservableState(
            0, name="onboarding.years_experience"
        )
        self.highest_qualification: ObservableState[str] = ObservableState(
            "", name="onboarding.highest_qualification"
        )

        # Skills
        self.user_skills: LocalCollection[UserSkillRecord] = LocalCollection(
            "onboarding.user_skills",
            identity_of=lambda row: row.user_skill_id,
            placeholder=_blank_skill_row,
        )
        self.all_skills: ObservableState[tuple[SkillRecord, ...]] = ObservableState(
            (), name="onboarding.all_skills"
        )
        self.skill_search_query: ObservableState[str] = ObservableState(
            "", name="onboarding.skill_search_query"
        )

        # Career goals
        self.user_career_goals: ObservableState[tuple[CareerGoalRecord, ...]] = (
            ObservableState((), name="onboarding.user_career_goals")
        )
        self.all_career_paths: ObservableState[tuple[CareerPathRecord, ...]] = (
            ObservableState((), name="onboarding.all_career_paths")
        )
        self.career_search_query: ObservableState[str] = ObservableState(
            "", name="onboarding.career_search_query"
        )
        self.long_term_goal: ObservableState[str] = ObservableState(
            "", name="onboarding.long_term_goal"
        )

        # Projects
        self.projects: LocalCollection[ProjectRecord] = LocalCollection(
            "onboarding.projects",
            identity_of=lambda row: row.project_id,
            placeholder=_blank_project_row,
        )

        self.ui_state: ObservableState[UiState] = ObservableState(
            Idle(), name="onboarding.ui"
        )

        self._loader: SyncController[OnboardingSnapshot] = SyncController(
            ONBOARDING_SPEC, gateway, credentials
        )
        self._loader.state.subscribe(self._on_aggregate, replay=False)
        self._skill_catalog: SyncController[tuple[SkillRecord, ...]] = SyncController(
            SKILL_CATALOG_SPEC, gateway
        )
        self._career_catalog: SyncController[tuple[CareerPathRecord, ...]] = (
            SyncController(CAREER_PATH_CATALOG_SPEC, gateway)
        )
        self._form = FormSubmitter("onboarding", gateway, credentials, self.ui_state)

    # -------------------------------------------------------------------------
    # Aggregate load
    # -------------------------------------------------------------------------

    def _on_aggregate(self, result: RemoteResult[OnboardingSnapshot]) -> None:
        match result:
            case Loading():
                self.ui_state.set(Loading())
            case Success(value=snapshot):
                self._populate(snapshot)
                self.ui_state.set(Success(DATA_LOADED))
            case Error():
                self.ui_state.set(result)

    def _populate(self, snapshot: OnboardingSnapshot) -> None:
        self.name.set(snapshot.name)
        self.email.set(snapshot.email)
        self.current_role.set(snapshot.current_role)
        self.years_experience.set(snapshot.years_experience)
        self.highest_qualification.set(snapshot.highest_qualification)
        self.user_skills.replace_all(snapshot.skills)
        self.projects.replace_all(snapshot.projects)
        self.user_career_goals.set(snapshot.career_goals)

    async def load_initial_data(self) -> RemoteResult[OnboardingSnapshot]:
        return await self._loader.fetch()

    # -------------------------------------------------------------------------
    # Basic info
    # -------------------------------------------------------------------------

    def on_name_change(self, name: str) -> None:
        self.name.set(name)

    def on_current_role_change(self, role: str) -> None:
        self.current_role.set(role)

    def on_years_experience_change(self, years: int) -> None:
        self.years_experience.set(years)

    def on_highest_qualification_change(self, qualification: str) -> None:
        self.highest_qualification.set(qualification)

    async def save_basic_info(self) -> UiState:
        """Persist the name entered on the basic-info step."""
        return await self._form.submit(
            lambda identity: operations.update_user(identity.id, name=self.name.value),
            success_message=BASIC_INFO_SAVED,
            not_logged_in_message="Cannot save, user not logged in",
        )

    # -------------------------------------------------------------------------
    # Skills
    # -------------------------------------------------------------------------

    def on_skill_search_query_change(self, query: str) -> None:
        self.skill_search_query.set(query)

    @property
    def filtered_skills(self) -> tuple[SkillRecord, ...]:
        return filter_by_name(self.all_skills.value, self.skill_search_query.value)

    async def fetch_all_skills(self) -> RemoteResult[tuple[SkillRecord, ...]]:
        """Load the skill catalog for the search box.

        Does not touch ``ui_state`` unless the load fails.
        """
        result = await self._skill_catalog.fetch()
        match result:
            case Success(value=skills):
                self.all_skills.set(skills)
            case Error():
                self.ui_state.set(result)
        return result

    async def add_user_skill(self, skill_id: str, level: str) -> RemoteResult[dict]:
        logger.info("onboarding_add_skill", skill_id=skill_id, level=level)
        return await self._loader.mutate_remote(
            lambda identity: operations.add_user_skill(identity.id, skill_id, level),
            not_logged_in_message="Cannot add skill, user not logged in",
        )

    def on_user_skill_change(self, index: int, skill: UserSkillRecord) -> None:
        self.user_skills.update_at(index, skill)

    def on_add_new_skill_row(self) -> UserSkillRecord:
        return self.user_skills.add_placeholder()

    def remove_user_skill(self, user_skill_id: str) -> None:
        self.user_skills.remove_where(user_skill_id)

    # -------------------------------------------------------------------------
    # Career goals
    # -------------------------------------------------------------------------

    def on_career_search_query_change(self, query: str) -> None:
        self.career_search_query.set(query)

    @property
    def filtered_career_paths(self) -> tuple[CareerPathRecord, ...]:
        return filter_by_name(self.all_career_paths.value, self.career_search_query.value)

    async def fetch_all_career_paths(self) -> RemoteResult[tuple[CareerPathRecord, ...]]:
        """Load the career path catalog, showing Loading and returning to Idle."""
        self.ui_state.set(Loading())
        result = await self._career_catalog.fetch()
        match result:
            case Success(value=paths):
                self.all_career_paths.set(paths)
                self.ui_state.set(Idle())
            case Error():
                self.ui_state.set(result)
        return result

    async def add_user_career_goal(self, career_path_id: str) -> RemoteResult[dict]:
        logger.info("onboarding_add_career_goal", career_path_id=career_path_id)
        return await self._loader.mutate_remote(
            lambda identity: operations.add_user_career_goal(identity.id, career_path_id),
            not_logged_in_message="Cannot add career goal, user not logged in",
        )

    async def remove_user_career_goal(self, career_path_id: str) -> RemoteResult[dict]:
        logger.info("onboarding_remove_career_goal", career_path_id=career_path_id)
        return await self._loader.mutate_remote(
            lambda identity: operations.remove_user_career_goal(
                identity.id, career_path_id
            ),
            not_logged_in_message="Cannot remove career goal, user not logged in",
        )

    def on_long_term_goal_change(self, description: str) -> None:
        self.long_term_goal.set(description)

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def on_project_change(self, index: int, project: ProjectRecord) -> None:
        self.projects.update_at(index, project)

    def on_add_project(self) -> ProjectRecord:
        return self.projects.add_placeholder()

    def remove_project(self, project_id: str) -> None:
        self.projects.remove_where(project_id)

    # -------------------------------------------------------------------------
    # Final review
    # -------------------------------------------------------------------------

    async def submit_final_review(self) -> UiState:
        """Save the reviewed basic info and confirm submission.

        Skill and project rows are not sent: the API has no mutation for
        inline-edited rows yet.
        """
        return await self._form.submit(
            lambda identity: operations.update_user(identity.id, name=self.name.value),
            success_message=PROFILE_SUBMITTED,
            not_logged_in_message="Cannot submit, user not logged in",
        )
