"""Advisor chat wire and storage models.

The chat service speaks camelCase JSON. History entries use the same shape
on disk so stored transcripts stay readable by older builds.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatMessage(BaseModel):
    """One transcript entry.

    Attributes:
        message: Text shown in the bubble.
        is_from_user: True for the user's messages, False for advisor replies.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    message: str
    is_from_user: bool


class Part(BaseModel):
    text: str


class Content(BaseModel):
    """Prior turn sent as conversation context."""

    role: Literal["user", "model"]
    parts: list[Part]

    @classmethod
    def from_message(cls, message: ChatMessage) -> "Content":
        return cls(
            role="user" if message.is_from_user else "model",
            parts=[Part(text=message.message)],
        )


class ChatRequest(BaseModel):
    """Body of ``POST /chat``."""

    model_config = _CAMEL

    user_id: str
    prompt: str = Field(..., min_length=1)
    history: list[Content] = Field(default_factory=list)


class ChatResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    response: str
