from __future__ import annotations

from typing import Any, Dict, List

from agentgate.models.provider import GEMINI_URL_TEMPLATE

from .base import Conversation, ProviderRequest, prepared_turns, to_gemini_vocabulary

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_NONE"

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_TOP_K = 1


def safety_settings() -> List[Dict[str, str]]:
    return [
        {"category": category, "threshold": SAFETY_THRESHOLD}
        for category in SAFETY_CATEGORIES
    ]


def translate_gemini(conversation: Conversation) -> ProviderRequest:
    contents: List[Dict[str, Any]] = [
        {"role": to_gemini_vocabulary(turn.role), "parts": [{"text": turn.content}]}
        for turn in prepared_turns(conversation)
    ]
    body: Dict[str, Any] = {
        "contents": contents,
        "safetySettings": safety_settings(),
        "generationConfig": {
            "temperature": (
                conversation.temperature
                if conversation.temperature is not None
                else DEFAULT_TEMPERATURE
            ),
            "topP": conversation.top_p if conversation.top_p is not None else DEFAULT_TOP_P,
            "topK": DEFAULT_TOP_K,
        },
    }
    instruction = conversation.system_instruction.strip()
    if instruction:
        body["system_instruction"] = {"parts": [{"text": instruction}]}

    url = GEMINI_URL_TEMPLATE.format(model=conversation.model)
    return ProviderRequest(url=url, body=body)


__all__ = ["SAFETY_CATEGORIES", "safety_settings", "translate_gemini"]
