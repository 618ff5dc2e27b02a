"""Pydantic models for raw GraphQL payloads.

Field names follow the server's camelCase through an alias generator. Every
field is optional unless the record it feeds cannot exist without it (a row's
own id, a catalog entry's name). Unknown fields are ignored so the server can
add fields without breaking older clients.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# =============================================================================
# Base
# =============================================================================


class RawPayload(BaseModel):
    """Base class for raw payload models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        # GraphQL IDs may arrive as JSON numbers
        coerce_numbers_to_str=True,
    )


# =============================================================================
# Skills
# =============================================================================


class RawSkillRef(RawPayload):
    """Skill nested inside a user-skill row. Everything may be missing."""

    id: str | None = None
    name: str | None = None
    category: str | None = None


class RawUserSkill(RawPayload):
    """A user's claimed skill with proficiency level."""

    id: str
    level: str | None = None
    skill: RawSkillRef | None = None


class RawSkill(RawPayload):
    """Catalog skill from ``getSkills``."""

    id: str
    name: str
    category: str | None = None


class RawRelatedRole(RawPayload):
    title: str | None = None


class RawCourse(RawPayload):
    title: str | None = None
    provider: str | None = None


class RawSkillDetail(RawPayload):
    """Skill detail from ``getSkillByName``."""

    id: str
    name: str
    description: str | None = None
    related_roles: list[RawRelatedRole | None] | None = None
    courses: list[RawCourse | None] | None = None


# =============================================================================
# Projects, career goals, career paths
# =============================================================================


class RawProject(RawPayload):
    id: str
    name: str
    description: str | None = None
    github_link: str | None = None
    status: str | None = None


class RawCareerGoal(RawPayload):
    """A career path the user has chosen as a goal (id is the path id)."""

    id: str
    title: str


class RawCareerPath(RawPayload):
    """Catalog career path from ``getCareerPaths``."""

    id: str
    name: str
    description: str | None = None


# =============================================================================
# User
# =============================================================================


class RawUser(RawPayload):
    """Scalar fields of ``getUserById``.

    Nested collections are validated separately by the projection that needs
    them so a malformed project row cannot break the skills screen.
    """

    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    birthday: str | None = None
    gender: str | None = None
    profile_image_url: str | None = None
    current_role: str | None = None
    years_experience: int | None = None
    highest_qualification: str | None = None


class RawAuthUser(RawPayload):
    id: str
    name: str | None = None
    email: str | None = None


class RawAuthPayload(RawPayload):
    """``login`` / ``register`` response (AuthPayload fragment)."""

    token: str
    user: RawAuthUser
