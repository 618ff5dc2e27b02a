"""Entity projection layer: UI records and payload-to-record mappers."""

from pathfinder.projections.records import (
    PROFICIENCY_LEVELS,
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
    is_temporary_id,
    new_temporary_id,
)

__all__ = [
    "PROFICIENCY_LEVELS",
    "AuthSession",
    "CareerGoalRecord",
    "CareerPathRecord",
    "Gender",
    "OnboardingSnapshot",
    "ProfileRecord",
    "ProjectRecord",
    "RoleRecord",
    "SkillDetailRecord",
    "SkillRecord",
    "UserRecord",
    "UserSkillRecord",
    "is_temporary_id",
    "new_temporary_id",
]
