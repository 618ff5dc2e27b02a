"""Pydantic models for raw remote payloads and advisor chat messages."""

from pathfinder.schemas.chat import ChatMessage, ChatRequest, ChatResponse, Content, Part
from pathfinder.schemas.payloads import (
    RawAuthPayload,
    RawAuthUser,
    RawCareerGoal,
    RawCareerPath,
    RawCourse,
    RawPayload,
    RawProject,
    RawRelatedRole,
    RawSkill,
    RawSkillDetail,
    RawSkillRef,
    RawUser,
    RawUserSkill,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "Content",
    "Part",
    "RawAuthPayload",
    "RawAuthUser",
    "RawCareerGoal",
    "RawCareerPath",
    "RawCourse",
    "RawPayload",
    "RawProject",
    "RawRelatedRole",
    "RawSkill",
    "RawSkillDetail",
    "RawSkillRef",
    "RawUser",
    "RawUserSkill",
]
