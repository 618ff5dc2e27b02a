"""Profile form controller.

Loads the editable profile fields once, lets the UI edit them locally, and
saves them with a single ``UpdateUser`` mutation. The form rests in ``Idle``;
a save ends in ``Success("Changes Saved!")`` until ``reset_ui_state()``.
"""

import structlog

from pathfinder.gateway import operations
from pathfinder.gateway.base import RemoteGateway
from pathfinder.projections.mappers import project_profile
from pathfinder.projections.records import Gender, ProfileRecord
from pathfinder.session.credential_store import CredentialStore
from pathfinder.sync.engine import EntitySpec, FormSubmitter, SyncController
from pathfinder.sync.result import Error, Idle, Loading, RemoteResult, Success, UiState
from pathfinder.sync.state import ObservableState

logger = structlog.get_logger()

PROFILE_SPEC: EntitySpec[ProfileRecord] = EntitySpec(
    name="profile",
    build_fetch=lambda identity: operations.get_user_onboarding_data(identity.id),
    select=lambda data: data.get("getUserById"),
    project=project_profile,
    not_found_message="User not found",
    not_logged_in_message="User not logged in",
)

CHANGES_SAVED = "Changes Saved!"
CANNOT_SAVE_NOT_LOGGED_IN = "Cannot save, user not logged in"


class ProfileController:
    """Editable profile form.

    Attributes:
        name, phone, birthday, email, gender, profile_image_url: Field states.
            Email is shown but never sent.
        ui_state: Idle / Loading / Success(message) / Error(message).
    """

    def __init__(self, gateway: RemoteGateway, credentials: CredentialStore) -> None:
        self.name: ObservableState[str] = ObservableState("", name="profile.name")
        self.phone: ObservableState[str] = ObservableState("", name="profile.phone")
        self.birthday: ObservableState[str] = ObservableState("", name="profile.birthday")
        self.email: ObservableState[str] = ObservableState("", name="profile.email")
        self.gender: ObservableState[Gender | None] = ObservableState(
            None, name="profile.gender"
        )
        self.profile_image_url: ObservableState[str | None] = ObservableState(
            None, name="profile.profile_image_url"
        )
        self.ui_state: ObservableState[UiState] = ObservableState(Idle(), name="profile.ui")

        self._loader: SyncController[ProfileRecord] = SyncController(
            PROFILE_SPEC, gateway, credentials
        )
        self._loader.state.subscribe(self._on_loaded, replay=False)
        self._form = FormSubmitter("profile", gateway, credentials, self.ui_state)

    def _on_loaded(self, result: RemoteResult[ProfileRecord]) -> None:
        match result:
            case Loading():
                self.ui_state.set(Loading())
            case Success(value=record):
                self.name.set(record.name)
                self.phone.set(record.phone)
                self.birthday.set(record.birthday)
                self.email.set(record.email)
                self.gender.set(record.gender)
                self.profile_image_url.set(record.profile_image_url)
                # Ready for editing
                self.ui_state.set(Idle())
            case Error():
                self.ui_state.set(result)

    async def fetch_profile(self) -> RemoteResult[ProfileRecord]:
        return await self._loader.fetch()

    def on_name_change(self, name: str) -> None:
        self.name.set(name)

    def on_phone_change(self, phone: str) -> None:
        self.phone.set(phone)

    def on_birthday_change(self, birthday: str) -> None:
        self.birthday.set(birthday)

    def on_gender_change(self, gender: Gender) -> None:
        self.gender.set(gender)

    async def save_changes(self) -> UiState:
        """Send the edited fields.

        Fields that are None are left untouched, and so is a gender this
        client could not parse (``Gender.UNKNOWN``).
        """
        gender = self.gender.value
        if gender is Gender.UNKNOWN:
            gender = None
        return await self._form.submit(
            lambda identity: operations.update_user(
                identity.id,
                name=self.name.value,
                phone=self.phone.value,
                birthday=self.birthday.value,
                gender=gender.value if gender is not None else None,
                profile_image_url=self.profile_image_url.value,
            ),
            success_message=CHANGES_SAVED,
            not_logged_in_message=CANNOT_SAVE_NOT_LOGGED_IN,
        )

    def reset_ui_state(self) -> None:
        self.ui_state.set(Idle())
