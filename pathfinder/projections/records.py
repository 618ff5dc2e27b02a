"""Flat, non-null records exposed to the presentation layer.

Records are frozen; local edits produce new instances via
``dataclasses.replace``.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum

# Prefix marking identities minted on the client for rows the server has
# not confirmed yet
TEMPORARY_ID_PREFIX = "tmp-"

# Proficiency levels offered by the add-skill dialog
PROFICIENCY_LEVELS: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced", "Certified")


def new_temporary_id() -> str:
    """Mint a client-temporary identity (``tmp-<uuid4>``)."""
    return f"{TEMPORARY_ID_PREFIX}{uuid.uuid4()}"


def is_temporary_id(identity: str) -> bool:
    """Return True for identities minted by ``new_temporary_id``."""
    return identity.startswith(TEMPORARY_ID_PREFIX)


class Gender(Enum):
    """Server ``Gender`` enum. UNKNOWN covers values this client predates."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "Gender | None":
        """Map a raw server value to a Gender, or None when absent."""
        if value is None:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class UserSkillRecord:
    """A skill claimed by the user.

    Attributes:
        user_skill_id: Row identity (server id or ``tmp-`` id).
        skill_id: Catalog skill id ("" for a blank local row).
        name: Skill name.
        level: Proficiency level.
    """

    user_skill_id: str
    skill_id: str
    name: str
    level: str

    @property
    def is_temporary(self) -> bool:
        return is_temporary_id(self.user_skill_id)


@dataclass(frozen=True)
class ProjectRecord:
    project_id: str
    name: str
    description: str
    github_link: str
    status: str

    @property
    def is_temporary(self) -> bool:
        return is_temporary_id(self.project_id)


@dataclass(frozen=True)
class RoleRecord:
    """Current or desired role shown on the roles screen."""

    title: str
    is_desired: bool


@dataclass(frozen=True)
class CareerGoalRecord:
    career_path_id: str
    title: str


@dataclass(frozen=True)
class SkillRecord:
    """Catalog skill (trending skills, add-skill search)."""

    id: str
    name: str
    category: str


@dataclass(frozen=True)
class CareerPathRecord:
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class SkillDetailRecord:
    """Skill detail screen.

    Attributes:
        courses: (title, provider) pairs.
    """

    id: str
    name: str
    description: str
    related_roles: tuple[str, ...] = ()
    courses: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ProfileRecord:
    """Editable profile fields. Email is read-only."""

    name: str
    phone: str
    birthday: str
    email: str
    gender: Gender | None = None
    profile_image_url: str | None = None


@dataclass(frozen=True)
class UserRecord:
    """The logged-in user as shown on the home screen."""

    id: str
    name: str
    email: str
    current_role: str
    years_experience: int
    skills: tuple[UserSkillRecord, ...] = ()


@dataclass(frozen=True)
class OnboardingSnapshot:
    """Everything the onboarding flow loads in one query."""

    name: str
    email: str
    current_role: str
    years_experience: int
    highest_qualification: str
    skills: tuple[UserSkillRecord, ...] = field(default_factory=tuple)
    projects: tuple[ProjectRecord, ...] = field(default_factory=tuple)
    career_goals: tuple[CareerGoalRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful login or registration."""

    token: str
    user_id: str
    user_name: str | None
    user_email: str | None
