from __future__ import annotations

from typing import Any, Dict, List

from agentgate.models.provider import GITHUB_MODELS_URL

from .base import Conversation, ProviderRequest, prepared_turns, to_assistant_vocabulary


def translate_github(conversation: Conversation) -> ProviderRequest:
    """
    GitHub Models chat completions. No sampling block is sent.
    """
    messages: List[Dict[str, str]] = []
    instruction = conversation.system_instruction.strip()
    if instruction:
        messages.append({"role": "system", "content": instruction})
    messages.extend(
        {"role": to_assistant_vocabulary(turn.role), "content": turn.content}
        for turn in prepared_turns(conversation)
    )
    body: Dict[str, Any] = {"model": conversation.model, "messages": messages}
    return ProviderRequest(url=GITHUB_MODELS_URL, body=body)


__all__ = ["translate_github"]
