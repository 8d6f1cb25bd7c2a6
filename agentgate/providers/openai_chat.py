from __future__ import annotations

from typing import Any, Dict, List

from agentgate.models.provider import OPENAI_CHAT_URL

from .base import Conversation, ProviderRequest, prepared_turns, to_assistant_vocabulary

REASONING_MODEL_PREFIXES = ("o1", "o3", "o4")
# These models only accept their built-in sampling values.
FIXED_SAMPLING_MODELS = frozenset({"gpt-5", "gpt-5-mini", "gpt-5-nano"})

DEFAULT_TEMPERATURE = 0.2
DEFAULT_TOP_P = 0.1


def is_reasoning_model(model: str) -> bool:
    return model.startswith(REASONING_MODEL_PREFIXES)


def supports_sampling(model: str) -> bool:
    return not is_reasoning_model(model) and model not in FIXED_SAMPLING_MODELS


def translate_openai_chat(conversation: Conversation) -> ProviderRequest:
    model = conversation.model
    instruction = conversation.system_instruction.strip()

    messages: List[Dict[str, str]] = [
        {"role": to_assistant_vocabulary(turn.role), "content": turn.content}
        for turn in prepared_turns(conversation)
    ]

    if instruction:
        if is_reasoning_model(model):
            # No system role for reasoning models; fold it into the last turn.
            last = messages[-1]
            messages[-1] = {**last, "content": f"{instruction}\n{last['content']}"}
        else:
            messages.insert(0, {"role": "system", "content": instruction})

    body: Dict[str, Any] = {"model": model, "messages": messages}
    if supports_sampling(model):
        body["temperature"] = (
            conversation.temperature
            if conversation.temperature is not None
            else DEFAULT_TEMPERATURE
        )
        body["top_p"] = (
            conversation.top_p if conversation.top_p is not None else DEFAULT_TOP_P
        )

    return ProviderRequest(url=OPENAI_CHAT_URL, body=body)


__all__ = [
    "FIXED_SAMPLING_MODELS",
    "REASONING_MODEL_PREFIXES",
    "is_reasoning_model",
    "supports_sampling",
    "translate_openai_chat",
]
