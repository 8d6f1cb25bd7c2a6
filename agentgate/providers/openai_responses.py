from __future__ import annotations

from typing import Any, Dict, List, Optional

from agentgate.models.provider import OPENAI_RESPONSES_URL
from agentgate.settings import settings

from .base import (
    Conversation,
    ProviderRequest,
    Turn,
    ensure_trailing_user_turn,
    to_assistant_vocabulary,
)

NO_FILES_MARKER = "_No files provided._"


def _render_files(conversation: Conversation) -> List[str]:
    parts = ["# Project Files"]
    if not conversation.files:
        parts.append(NO_FILES_MARKER)
        return parts
    for snippet in conversation.files:
        parts.append(f"## File: {snippet.path}\n\n```\n{snippet.content}\n```")
    return parts


def _split_latest(turns: List[Turn]) -> tuple[List[Turn], Optional[Turn]]:
    if turns and to_assistant_vocabulary(turns[-1].role) == "user":
        return turns[:-1], turns[-1]
    return turns, None


def render_input(conversation: Conversation) -> str:
    """
    Render the whole conversation as one markdown document.

    Files come first, then earlier turns under `# Conversation`, then
    the latest user turn on its own.
    """
    turns = list(conversation.turns)
    if not conversation.project:
        turns = ensure_trailing_user_turn(turns)
    earlier, latest = _split_latest(turns)

    parts = _render_files(conversation)
    if earlier:
        parts.append("# Conversation")
        for turn in earlier:
            parts.append(f"**{to_assistant_vocabulary(turn.role)}**: {turn.content}")
    if latest is not None and latest.content.strip():
        parts.append(f"\n\n{latest.content.strip()}")
    return "\n\n".join(parts)


def translate_openai_responses(conversation: Conversation) -> ProviderRequest:
    body: Dict[str, Any] = {
        "model": conversation.model,
        "input": render_input(conversation),
        "max_output_tokens": settings.openai_max_output_tokens,
    }
    instruction = conversation.system_instruction.strip()
    if instruction:
        body["instructions"] = instruction
    return ProviderRequest(url=OPENAI_RESPONSES_URL, body=body)


__all__ = ["NO_FILES_MARKER", "render_input", "translate_openai_responses"]
