"""Entity projection: raw payload -> flat UI record.

Pure functions. Each one validates the part of the payload it needs, drops
null list entries silently, applies defaults for nullable display fields and
copies identity and name fields verbatim. A missing structurally required
field raises ``ProjectionError``.
"""

from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from pathfinder.core.errors import ProjectionError
from pathfinder.projections.records import (
    AuthSession,
    CareerGoalRecord,
    CareerPathRecord,
    Gender,
    OnboardingSnapshot,
    ProfileRecord,
    ProjectRecord,
    RoleRecord,
    SkillDetailRecord,
    SkillRecord,
    UserRecord,
    UserSkillRecord,
)
from pathfinder.schemas.payloads import (
    RawAuthPayload,
    RawCareerGoal,
    RawCareerPath,
    RawPayload,
    RawProject,
    RawSkill,
    RawSkillDetail,
    RawUser,
    RawUserSkill,
)

M = TypeVar("M", bound=RawPayload)

# Display defaults
UNKNOWN_SKILL_NAME = "Unknown Skill"
UNKNOWN_LEVEL = "N/A"
DEFAULT_CATEGORY = "General"
NO_DESCRIPTION = "No description available."
DESIRED_SUFFIX = " (Desired)"

# The onboarding flow pre-selects a level for skills saved without one
ONBOARDING_UNKNOWN_SKILL_NAME = "Unknown"
ONBOARDING_DEFAULT_LEVEL = "Beginner"


# =============================================================================
# Helpers
# =============================================================================


def _validate(model: type[M], payload: Any, entity: str) -> M:
    """Validate ``payload`` against ``model`` or raise ProjectionError."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or entity
        raise ProjectionError(entity, f"{location}: {first['msg']}") from e


def _require_object(raw: Any, entity: str) -> dict[str, Any]:
    """Return ``raw`` if it is a JSON object, else raise ProjectionError."""
    if not isinstance(raw, dict):
        raise ProjectionError(entity, f"expected an object, got {type(raw).__name__}")
    return raw


def _non_null(items: Iterable[Any] | None, entity: str = "list") -> list[Any]:
    """Drop null entries from a nullable list.

    Raises:
        ProjectionError: If ``items`` is present but not a list.
    """
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise ProjectionError(entity, f"expected a list, got {type(items).__name__}")
    return [item for item in items if item is not None]


def _collection(raw_user: Any, key: str) -> list[Any]:
    return _non_null(_require_object(raw_user, "user").get(key), key)


# =============================================================================
# User-owned collections
# =============================================================================


def project_user_skill(
    raw: dict[str, Any],
    *,
    unknown_name: str = UNKNOWN_SKILL_NAME,
    default_level: str = UNKNOWN_LEVEL,
) -> UserSkillRecord:
    """Project one user-skill row.

    Args:
        raw: Raw ``skills[]`` entry.
        unknown_name: Name used when the nested skill is missing.
        default_level: Level used when none was stored.

    Returns:
        UserSkillRecord.

    Raises:
        ProjectionError: If the row has no id.
    """
    row = _validate(RawUserSkill, raw, "user skill")
    skill = row.skill
    return UserSkillRecord(
        user_skill_id=row.id,
        skill_id=(skill.id if skill and skill.id else ""),
        name=(skill.name if skill and skill.name is not None else unknown_name),
        level=row.level if row.level is not None else default_level,
    )


def project_user_skills(
    raw_user: dict[str, Any],
    *,
    unknown_name: str = UNKNOWN_SKILL_NAME,
    default_level: str = UNKNOWN_LEVEL,
) -> tuple[UserSkillRecord, ...]:
    """Project ``getUserById.skills`` (nulls dropped)."""
    return tuple(
        project_user_skill(item, unknown_name=unknown_name, default_level=default_level)
        for item in _collection(raw_user, "skills")
    )


def project_project(raw: dict[str, Any]) -> ProjectRecord:
    """Project one project row. Raises ProjectionError without id or name."""
    row = _validate(RawProject, raw, "project")
    return ProjectRecord(
        project_id=row.id,
        name=row.name,
        description=row.description or "",
        github_link=row.github_link or "",
        status=row.status or "",
    )


def project_projects(raw_user: dict[str, Any]) -> tuple[ProjectRecord, ...]:
    """Project ``getUserById.projects`` (nulls dropped)."""
    return tuple(project_project(item) for item in _collection(raw_user, "projects"))


def project_career_goals(raw_user: dict[str, Any]) -> tuple[CareerGoalRecord, ...]:
    """Project ``getUserById.careerGoals`` (nulls dropped)."""
    goals = (
        _validate(RawCareerGoal, item, "career goal")
        for item in _collection(raw_user, "careerGoals")
    )
    return tuple(CareerGoalRecord(career_path_id=g.id, title=g.title) for g in goals)


def project_roles(raw_user: dict[str, Any]) -> tuple[RoleRecord, ...]:
    """Combine the current role and desired career goals.

    The current role comes first (only when non-blank), followed by each
    career goal titled ``"<title> (Desired)"``.
    """
    roles: list[RoleRecord] = []

    current_role = _require_object(raw_user, "user").get("currentRole")
    if isinstance(current_role, str) and current_role.strip():
        roles.append(RoleRecord(title=current_role, is_desired=False))

    for goal in project_career_goals(raw_user):
        roles.append(RoleRecord(title=f"{goal.title}{DESIRED_SUFFIX}", is_desired=True))

    return tuple(roles)


# =============================================================================
# Catalogs
# =============================================================================


def project_skill(raw: dict[str, Any]) -> SkillRecord:
    """Project a catalog skill. Missing category becomes "General"."""
    skill = _validate(RawSkill, raw, "skill")
    return SkillRecord(
        id=skill.id,
        name=skill.name,
        category=skill.category or DEFAULT_CATEGORY,
    )


def project_skills(raw_skills: list[Any] | None) -> tuple[SkillRecord, ...]:
    return tuple(project_skill(item) for item in _non_null(raw_skills, "skill list"))


def project_career_paths(raw_paths: list[Any] | None) -> tuple[CareerPathRecord, ...]:
    paths = (
        _validate(RawCareerPath, item, "career path")
        for item in _non_null(raw_paths, "career path list")
    )
    return tuple(
        CareerPathRecord(id=p.id, name=p.name, description=p.description or "")
        for p in paths
    )


def project_skill_detail(raw: dict[str, Any]) -> SkillDetailRecord:
    """Project a skill detail.

    Related roles without a title are dropped; missing course fields become
    empty strings.
    """
    detail = _validate(RawSkillDetail, raw, "skill detail")
    return SkillDetailRecord(
        id=detail.id,
        name=detail.name,
        description=detail.description or NO_DESCRIPTION,
        related_roles=tuple(
            role.title for role in _non_null(detail.related_roles) if role.title is not None
        ),
        courses=tuple(
            (course.title or "", course.provider or "")
            for course in _non_null(detail.courses)
        ),
    )


# =============================================================================
# User aggregates
# =============================================================================


def project_profile(raw_user: dict[str, Any]) -> ProfileRecord:
    user = _validate(RawUser, raw_user, "user")
    return ProfileRecord(
        name=user.name or "",
        phone=user.phone or "",
        birthday=user.birthday or "",
        email=user.email or "",
        gender=Gender.parse(user.gender),
        profile_image_url=user.profile_image_url,
    )


def project_user(raw_user: dict[str, Any]) -> UserRecord:
    user = _validate(RawUser, raw_user, "user")
    return UserRecord(
        id=user.id,
        name=user.name or "",
        email=user.email or "",
        current_role=user.current_role or "",
        years_experience=user.years_experience or 0,
        skills=project_user_skills(raw_user),
    )


def project_onboarding(raw_user: dict[str, Any]) -> OnboardingSnapshot:
    """Project the full onboarding aggregate in one pass."""
    user = _validate(RawUser, raw_user, "user")
    return OnboardingSnapshot(
        name=user.name or "",
        email=user.email or "",
        current_role=user.current_role or "",
        years_experience=user.years_experience or 0,
        highest_qualification=user.highest_qualification or "",
        skills=project_user_skills(
            raw_user,
            unknown_name=ONBOARDING_UNKNOWN_SKILL_NAME,
            default_level=ONBOARDING_DEFAULT_LEVEL,
        ),
        projects=project_projects(raw_user),
        career_goals=project_career_goals(raw_user),
    )


def project_auth_session(raw: dict[str, Any]) -> AuthSession:
    payload = _validate(RawAuthPayload, raw, "auth payload")
    return AuthSession(
        token=payload.token,
        user_id=payload.user.id,
        user_name=payload.user.name,
        user_email=payload.user.email,
    )
