"""Tests for form-style controllers: profile, onboarding and auth.

These rest in Idle and report Loading / Success(message) / Error(message)
through a ui_state slot.
"""

import pytest

from pathfinder.controllers.auth import AuthController
from pathfinder.controllers.onboarding import OnboardingController
from pathfinder.controllers.profile import ProfileController
from pathfinder.projections.records import (
    AuthSession,
    Gender,
    ProjectRecord,
    UserSkillRecord,
)
from pathfinder.session.credential_store import InMemoryCredentialStore, UserIdentity
from pathfinder.sync.result import Error, Idle, Loading, Success
from tests.conftest import TEST_USER_ID, error_body, user_body, user_skill

ONBOARDING_QUERY = "GetUserOnboardingData"


def _onboarding_body(**fields):
    base = {
        "phone": "555",
        "currentRole": "Analyst",
        "yearsExperience": 2,
        "highestQualification": "BSc",
        "skills": [user_skill("us-1", name="SQL", level=None)],
        "projects": [{"id": "p1", "name": "Dashboards"}],
        "careerGoals": [{"id": "c1", "title": "Data Engineer"}],
    }
    base.update(fields)
    return user_body(**base)


class TestProfileController:
    """Load, edit locally, save."""

    def test_starts_idle(self, gateway, credentials):
        """A new profile form should rest in Idle."""
        assert ProfileController(gateway, credentials).ui_state.value == Idle()

    async def test_fetch_populates_fields_and_returns_to_idle(self, gateway, credentials):
        """fetch_profile() should fill the fields and rest in Idle."""
        gateway.set_response(
            ONBOARDING_QUERY, user_body(phone="555", birthday="1990-01-01", gender="MALE")
        )
        controller = ProfileController(gateway, credentials)
        seen = []
        controller.ui_state.subscribe(seen.append, replay=False)

        await controller.fetch_profile()

        assert seen == [Loading(), Idle()]
        assert controller.name.value == "Ada"
        assert controller.email.value == "ada@example.com"
        assert controller.phone.value == "555"
        assert controller.gender.value is Gender.MALE

    async def test_fetch_errors(self, gateway, credentials, anonymous):
        """Missing identity and a null user should both end in Error."""
        assert await ProfileController(gateway, anonymous).fetch_profile() == Error(
            "User not logged in"
        )

        gateway.set_response(ONBOARDING_QUERY, {"data": {"getUserById": None}})
        controller = ProfileController(gateway, credentials)
        await controller.fetch_profile()
        assert controller.ui_state.value == Error("User not found")

    async def test_save_changes_sends_edited_fields(self, gateway, credentials):
        """save_changes() should send every edited field."""
        gateway.set_response(ONBOARDING_QUERY, user_body())
        controller = ProfileController(gateway, credentials)
        await controller.fetch_profile()

        controller.on_name_change("Ada L.")
        controller.on_phone_change("777")
        controller.on_birthday_change("1815-12-10")
        controller.on_gender_change(Gender.FEMALE)
        outcome = await controller.save_changes()

        assert outcome == Success("Changes Saved!")
        assert controller.ui_state.value == Success("Changes Saved!")
        update = gateway.calls[-1]
        assert update.name == "UpdateUser"
        assert update.variables == {
            "id": TEST_USER_ID,
            "name": "Ada L.",
            "phone": "777",
            "birthday": "1815-12-10",
            "gender": "FEMALE",
        }

    async def test_unparsed_gender_is_not_sent_back(self, gateway, credentials):
        """A gender this client could not parse should be left out of the update."""
        gateway.set_response(ONBOARDING_QUERY, user_body(gender="NON_BINARY"))
        controller = ProfileController(gateway, credentials)
        await controller.fetch_profile()
        assert controller.gender.value is Gender.UNKNOWN

        controller.on_name_change("Ada L.")
        await controller.save_changes()

        update = gateway.calls[-1]
        assert "gender" not in update.variables
        assert update.variables == {
            "id": TEST_USER_ID,
            "name": "Ada L.",
            "phone": "",
            "birthday": "",
        }

    async def test_save_failure_and_reset(self, gateway, credentials):
        """A failed save should show the error until reset."""
        gateway.set_response("UpdateUser", error_body("Invalid phone"))
        controller = ProfileController(gateway, credentials)

        await controller.save_changes()
        assert controller.ui_state.value == Error("Invalid phone")

        controller.reset_ui_state()
        assert controller.ui_state.value == Idle()

    async def test_save_without_identity(self, gateway, anonymous):
        """save_changes() without identity should fail without a call."""
        controller = ProfileController(gateway, anonymous)
        assert await controller.save_changes() == Error("Cannot save, user not logged in")
        gateway.assert_not_called()


class TestOnboardingLoad:
    """Loading the onboarding aggregate."""

    async def test_load_populates_aggregate(self, gateway, credentials):
        """load_initial_data() should fill every part of the flow."""
        gateway.set_response(ONBOARDING_QUERY, _onboarding_body())
        controller = OnboardingController(gateway, credentials)

        await controller.load_initial_data()

        assert controller.ui_state.value == Success("Data Loaded")
        assert controller.current_role.value == "Analyst"
        assert controller.years_experience.value == 2
        assert controller.highest_qualification.value == "BSc"
        (skill,) = controller.user_skills.items
        assert (skill.name, skill.level) == ("SQL", "Beginner")
        assert [p.project_id for p in controller.projects.items] == ["p1"]
        assert [g.title for g in controller.user_career_goals.value] == ["Data Engineer"]

    async def test_user_not_found(self, gateway, credentials):
        """A null user should give "User not found"."""
        gateway.set_response(ONBOARDING_QUERY, {"data": {"getUserById": None}})
        controller = OnboardingController(gateway, credentials)
        await controller.load_initial_data()
        assert controller.ui_state.value == Error("User not found")


class TestOnboardingRemoteEdits:
    """Skills and career goals persist, then reload the aggregate."""

    async def test_add_user_skill_shows_loading_then_reloads(self, gateway, credentials):
        """Adding a skill should show Loading, then reload the aggregate."""
        gateway.queue_responses(
            ONBOARDING_QUERY,
            _onboarding_body(skills=[]),
            _onboarding_body(skills=[user_skill("us-7", name="Go", level="Advanced")]),
        )
        controller = OnboardingController(gateway, credentials)
        await controller.load_initial_data()
        seen = []
        controller.ui_state.subscribe(seen.append, replay=False)

        await controller.add_user_skill("skill-Go", "Advanced")

        assert seen == [Loading(), Loading(), Success("Data Loaded")]
        assert [s.user_skill_id for s in controller.user_skills.items] == ["us-7"]

    async def test_add_career_goal_failure(self, gateway, credentials):
        """A failed career-goal add should surface the server message."""
        gateway.set_response("AddUserCareerGoal", error_body("Unknown career path"))
        controller = OnboardingController(gateway, credentials)

        await controller.add_user_career_goal("c-404")

        assert controller.ui_state.value == Error("Unknown career path")
        assert gateway.call_names == ["AddUserCareerGoal"]

    async def test_remove_career_goal_reloads(self, gateway, credentials):
        """Removing a career goal should reload the aggregate."""
        gateway.queue_responses(ONBOARDING_QUERY, _onboarding_body(careerGoals=[]))
        controller = OnboardingController(gateway, credentials)

        await controller.remove_user_career_goal("c1")

        assert gateway.call_names == ["RemoveUserCareerGoal", ONBOARDING_QUERY]
        assert gateway.calls[0].variables == {"userId": TEST_USER_ID, "careerPathId": "c1"}
        assert controller.user_career_goals.value == ()

    @pytest.mark.parametrize(
        ("call", "message"),
        [
            (lambda c: c.add_user_skill("s", "Beginner"), "Cannot add skill, user not logged in"),
            (lambda c: c.add_user_career_goal("c"), "Cannot add career goal, user not logged in"),
            (
                lambda c: c.remove_user_career_goal("c"),
                "Cannot remove career goal, user not logged in",
            ),
            (lambda c: c.save_basic_info(), "Cannot save, user not logged in"),
        ],
    )
    async def test_not_logged_in_messages(self, gateway, anonymous, call, message):
        """Each remote edit should use its own not-logged-in message."""
        controller = OnboardingController(gateway, anonymous)
        await call(controller)
        assert controller.ui_state.value == Error(message)
        gateway.assert_not_called()


class TestOnboardingLocalEdits:
    """Skill rows and project rows are edited in memory only."""

    async def test_skill_rows(self, gateway, credentials):
        """Skill rows should be added, edited and removed locally."""
        gateway.set_response(ONBOARDING_QUERY, _onboarding_body())
        controller = OnboardingController(gateway, credentials)
        await controller.load_initial_data()

        row = controller.on_add_new_skill_row()
        assert row.is_temporary
        assert row.level == "Beginner"

        controller.on_user_skill_change(
            1, UserSkillRecord(row.user_skill_id, "s-2", "Go", "Advanced")
        )
        assert controller.user_skills.items[1].name == "Go"

        controller.on_user_skill_change(9, row)  # out of range
        controller.remove_user_skill("us-1")

        assert [s.name for s in controller.user_skills.items] == ["Go"]
        assert gateway.call_names == [ONBOARDING_QUERY]

    def test_project_rows(self, gateway, credentials):
        """Project rows should be added, edited and removed locally."""
        controller = OnboardingController(gateway, credentials)

        added = controller.on_add_project()
        controller.on_project_change(
            0, ProjectRecord(added.project_id, "CLI", "A tool", "https://git.example/cli", "")
        )
        assert controller.projects.items[0].name == "CLI"

        controller.remove_project(added.project_id)
        assert controller.projects.items == ()
        gateway.assert_not_called()

    def test_field_setters(self, gateway, credentials):
        """Basic-info setters should update their fields."""
        controller = OnboardingController(gateway, credentials)
        controller.on_name_change("Grace")
        controller.on_current_role_change("Admiral")
        controller.on_years_experience_change(40)
        controller.on_highest_qualification_change("PhD")
        controller.on_long_term_goal_change("Ship compilers")

        assert controller.name.value == "Grace"
        assert controller.current_role.value == "Admiral"
        assert controller.years_experience.value == 40
        assert controller.highest_qualification.value == "PhD"
        assert controller.long_term_goal.value == "Ship compilers"


class TestOnboardingCatalogs:
    """Skill and career path catalogs."""

    async def test_fetch_all_skills_and_search(self, gateway, credentials):
        """The skill catalog should load and filter without touching ui_state."""
        gateway.set_response(
            "GetSkills",
            {"data": {"getSkills": [{"id": "1", "name": "Kotlin"}, {"id": "2", "name": "Go"}]}},
        )
        controller = OnboardingController(gateway, credentials)

        await controller.fetch_all_skills()
        controller.on_skill_search_query_change("kot")

        assert [s.name for s in controller.filtered_skills] == ["Kotlin"]
        assert controller.ui_state.value == Idle()

    async def test_fetch_all_skills_failure_sets_error(self, gateway, credentials):
        """A failed skill catalog load should set ui_state to Error."""
        gateway.set_response("GetSkills", error_body("catalog offline"))
        controller = OnboardingController(gateway, credentials)
        await controller.fetch_all_skills()
        assert controller.ui_state.value == Error("catalog offline")

    async def test_fetch_all_career_paths_returns_to_idle(self, gateway, credentials):
        """Loading the career paths should go Loading then Idle."""
        gateway.set_response(
            "GetCareerPaths",
            {"data": {"getCareerPaths": [{"id": "c1", "name": "Data Engineer"}, None]}},
        )
        controller = OnboardingController(gateway, credentials)
        seen = []
        controller.ui_state.subscribe(seen.append, replay=False)

        await controller.fetch_all_career_paths()
        controller.on_career_search_query_change("DATA")

        assert seen == [Loading(), Idle()]
        assert [p.id for p in controller.filtered_career_paths] == ["c1"]

    async def test_fetch_all_career_paths_null(self, gateway, credentials):
        """A null career path catalog should set its not-found message."""
        gateway.set_response("GetCareerPaths", {"data": {"getCareerPaths": None}})
        controller = OnboardingController(gateway, credentials)
        await controller.fetch_all_career_paths()
        assert controller.ui_state.value == Error("Failed to load career paths")


class TestOnboardingForms:
    """Basic info and final review submission."""

    async def test_save_basic_info(self, gateway, credentials):
        """save_basic_info() should send the name and confirm."""
        controller = OnboardingController(gateway, credentials)
        controller.on_name_change("Grace")

        assert await controller.save_basic_info() == Success("Basic Info Saved!")
        assert gateway.calls[0].variables == {"id": TEST_USER_ID, "name": "Grace"}

    async def test_submit_final_review(self, gateway, credentials):
        """submit_final_review() should send UpdateUser and confirm."""
        controller = OnboardingController(gateway, credentials)
        outcome = await controller.submit_final_review()
        assert outcome == Success("Profile Submitted Successfully!")
        assert gateway.call_names == ["UpdateUser"]


class TestAuthController:
    """Identity lifecycle."""

    @staticmethod
    def _auth_body(field: str) -> dict:
        return {
            "data": {
                field: {
                    "token": "jwt-1",
                    "user": {"id": "u-42", "name": "Ada", "email": "ada@example.com"},
                }
            }
        }

    def test_starts_idle_without_saved_session(self, gateway, anonymous):
        """Without a saved identity the auth state should be Idle."""
        assert AuthController(gateway, anonymous).auth_state.value == Idle()

    def test_restores_saved_session(self, gateway, credentials):
        """A saved identity should be restored without a remote call."""
        controller = AuthController(gateway, credentials)
        assert controller.auth_state.value == Success(
            AuthSession(token="token-abc", user_id=TEST_USER_ID, user_name="", user_email="")
        )
        assert controller.is_logged_in
        gateway.assert_not_called()

    async def test_login_saves_identity(self, gateway, anonymous):
        """A successful login should save the identity."""
        gateway.set_response("Login", self._auth_body("login"))
        controller = AuthController(gateway, anonymous)

        outcome = await controller.login("ada@example.com", "pw")

        assert isinstance(outcome, Success)
        assert outcome.value.user_id == "u-42"
        assert anonymous.get_identity() == UserIdentity(id="u-42", token="jwt-1")

    async def test_register_saves_identity(self, gateway, anonymous):
        """A successful registration should save the identity."""
        gateway.set_response("Register", self._auth_body("register"))
        controller = AuthController(gateway, anonymous)

        await controller.register("ada@example.com", "pw", "Ada")

        assert gateway.calls[0].variables == {
            "email": "ada@example.com",
            "password": "pw",
            "name": "Ada",
        }
        assert anonymous.get_identity() == UserIdentity(id="u-42", token="jwt-1")

    async def test_login_server_error(self, gateway, anonymous):
        """A login error should be shown and nothing saved."""
        gateway.set_response("Login", error_body("Invalid credentials"))
        controller = AuthController(gateway, anonymous)

        assert await controller.login("a@b.c", "bad") == Error("Invalid credentials")
        assert anonymous.get_identity() is None

    @pytest.mark.parametrize(
        ("method", "field", "message"),
        [("login", "login", "Login failed"), ("register", "register", "Registration failed")],
    )
    async def test_null_payload_uses_fallback_message(
        self, gateway, anonymous, method, field, message
    ):
        """A null auth payload should use the operation's fallback message."""
        gateway.set_response(method.capitalize(), {"data": {field: None}})
        controller = AuthController(gateway, anonymous)
        args = ("a@b.c", "pw") if method == "login" else ("a@b.c", "pw", "A")

        assert await getattr(controller, method)(*args) == Error(message)

    async def test_malformed_payload(self, gateway, anonymous):
        """An auth payload without a token should end in Error."""
        gateway.set_response("Login", {"data": {"login": {"user": {"id": "u"}}}})
        outcome = await AuthController(gateway, anonymous).login("a@b.c", "pw")
        assert isinstance(outcome, Error)
        assert outcome.message.startswith("Malformed auth payload data")

    def test_logout_clears_identity(self, gateway):
        """logout() should clear credentials and return to Idle."""
        store = InMemoryCredentialStore(UserIdentity(id="u1", token="t1"))
        controller = AuthController(gateway, store)

        controller.logout()

        assert store.get_identity() is None
        assert controller.auth_state.value == Idle()
        assert not controller.is_logged_in

    def test_reset_state_keeps_identity(self, gateway, credentials):
        """reset_state() should return to Idle without logging out."""
        controller = AuthController(gateway, credentials)
        controller.reset_state()
        assert controller.auth_state.value == Idle()
        assert credentials.get_identity() is not None
