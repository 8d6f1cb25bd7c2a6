from __future__ import annotations

from typing import Any, Dict, List

from agentgate.models.provider import ANTHROPIC_MESSAGES_URL
from agentgate.settings import settings

from .base import Conversation, ProviderRequest, prepared_turns, to_assistant_vocabulary


def needs_extended_context(model: str) -> bool:
    return any(
        model.startswith(prefix)
        for prefix in settings.get_anthropic_beta_model_prefixes()
    )


def translate_anthropic(conversation: Conversation) -> ProviderRequest:
    """
    Build a Messages API request.

    The instruction only ever travels in the top-level `system` field;
    sampling parameters are left to the provider defaults.
    """
    messages: List[Dict[str, str]] = [
        {"role": to_assistant_vocabulary(turn.role), "content": turn.content}
        for turn in prepared_turns(conversation)
    ]
    max_tokens = (
        settings.anthropic_project_max_tokens
        if conversation.project
        else settings.anthropic_max_tokens
    )
    body: Dict[str, Any] = {
        "model": conversation.model,
        "max_tokens": max_tokens,
        "messages": messages,
    }
    instruction = conversation.system_instruction.strip()
    if instruction:
        body["system"] = instruction

    headers: Dict[str, str] = {}
    if needs_extended_context(conversation.model):
        headers["anthropic-beta"] = settings.anthropic_beta_header

    return ProviderRequest(url=ANTHROPIC_MESSAGES_URL, body=body, headers=headers)


__all__ = ["needs_extended_context", "translate_anthropic"]
