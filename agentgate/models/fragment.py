from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class FragmentKind(str, Enum):
    """
    Category of a staged conversation fragment.
    """

    MESSAGE = "message"
    SYSTEM_INSTRUCTION = "system_instruction"
    MODEL_TO_USE = "model_to_use"
    TEMPERATURE = "temperature"
    TOP_P = "top_p"
    API_KEY = "api_key"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    MODEL = "model"


class Fragment(BaseModel):
    """
    One staged piece of a conversation.

    Fragments are insert-only; the `sequence` value comes from the
    per-session counter and orders replay within a kind.
    """

    kind: FragmentKind = Field(..., description="Fragment category")
    sequence: int = Field(..., description="Per-session monotonic sequence", ge=1)
    role: str = Field(default="", description="Message role, empty for settings")
    content: str = Field(..., description="Fragment payload, numbers stored as text")


class StagedMessage(BaseModel):
    role: str
    content: str


class SessionSnapshot(BaseModel):
    """
    Everything staged for one session at the moment of completion.
    """

    session_id: str
    model: Optional[str] = None
    system_instruction: str = ""
    messages: List[StagedMessage] = Field(default_factory=list)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    api_key: Optional[str] = None


class FragmentWrite(BaseModel):
    """
    Body accepted by `POST /{provider}`.

    Every present field becomes its own fragment. `role` and `content`
    together form a message; either one alone is ignored.
    """

    system_instruction: Optional[str] = None
    model_to_use: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    api_key: Optional[str] = None
    role: Optional[str] = None
    content: Optional[str] = None


__all__ = [
    "Fragment",
    "FragmentKind",
    "FragmentWrite",
    "MessageRole",
    "SessionSnapshot",
    "StagedMessage",
]
