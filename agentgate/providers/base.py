"""
Provider-neutral conversation types shared by all translators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

TRAILING_USER_PROMPT = "Please let me know how you would like to proceed."

PROJECT_OPENING = "I need your help on this project."
PROJECT_NO_INPUT = "How would you like to proceed with this project?"
PROJECT_BEFORE_PROMPT = "What would you like to do next?"


@dataclass(frozen=True)
class Turn:
    role: str
    content: str


@dataclass(frozen=True)
class FileSnippet:
    path: str
    content: str


@dataclass(frozen=True)
class Conversation:
    """
    A fully assembled conversation, ready to be translated.

    `project` marks workspace conversations: `files` are expanded into
    scripted turns ahead of `turns`, except by translators that render
    files on their own (OpenAI responses).
    """

    model: str
    system_instruction: str = ""
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    turns: List[Turn] = field(default_factory=list)
    files: List[FileSnippet] = field(default_factory=list)
    project: bool = False


@dataclass
class ProviderRequest:
    url: str
    body: Dict[str, Any]
    # Extra provider headers chosen by the translator, auth excluded.
    headers: Dict[str, str] = field(default_factory=dict)


def to_assistant_vocabulary(role: str) -> str:
    return "assistant" if role == "model" else role


def to_gemini_vocabulary(role: str) -> str:
    return "model" if role == "assistant" else role


def fenced(content: str) -> str:
    return f"```\n{content}\n```\n"


def project_turns(conversation: Conversation) -> List[Turn]:
    """
    Expand a workspace conversation into the scripted exchange used to
    hand files to a chat model. Plain conversations are returned as-is.
    """
    if not conversation.project:
        return list(conversation.turns)

    turns: List[Turn] = [Turn("user", PROJECT_OPENING)]
    for snippet in conversation.files:
        turns.append(
            Turn("assistant", f"Please provide the content of the `{snippet.path}` file.")
        )
        turns.append(
            Turn(
                "user",
                f"Here is the content of the `{snippet.path}` file:\n{fenced(snippet.content)}",
            )
        )

    if not conversation.files and not conversation.turns:
        turns.append(Turn("assistant", PROJECT_NO_INPUT))
    elif conversation.turns:
        turns.append(Turn("assistant", PROJECT_BEFORE_PROMPT))
        turns.extend(conversation.turns)
    return turns


def ensure_trailing_user_turn(turns: List[Turn]) -> List[Turn]:
    """
    Providers reject conversations that do not end on a user turn.
    Appends exactly one generic user turn when needed.
    """
    if not turns or to_assistant_vocabulary(turns[-1].role) != "user":
        return [*turns, Turn("user", TRAILING_USER_PROMPT)]
    return list(turns)


def prepared_turns(conversation: Conversation) -> List[Turn]:
    """
    Scripted project turns followed by the trailing-turn rule.
    """
    return ensure_trailing_user_turn(project_turns(conversation))


__all__ = [
    "Conversation",
    "FileSnippet",
    "PROJECT_BEFORE_PROMPT",
    "PROJECT_NO_INPUT",
    "PROJECT_OPENING",
    "ProviderRequest",
    "TRAILING_USER_PROMPT",
    "Turn",
    "ensure_trailing_user_turn",
    "fenced",
    "prepared_turns",
    "project_turns",
    "to_assistant_vocabulary",
    "to_gemini_vocabulary",
]
