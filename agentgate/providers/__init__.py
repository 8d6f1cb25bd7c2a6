"""
Per-provider request translators.

`translate(kind, conversation)` picks the translator for a provider kind;
each translator is a pure function from `Conversation` to `ProviderRequest`.
"""

from __future__ import annotations

from typing import Callable, Dict

from agentgate.models.provider import ProviderKind

from .anthropic import translate_anthropic
from .base import Conversation, FileSnippet, ProviderRequest, Turn
from .gemini import translate_gemini
from .github_models import translate_github
from .openai_chat import translate_openai_chat
from .openai_responses import translate_openai_responses

Translator = Callable[[Conversation], ProviderRequest]

TRANSLATORS: Dict[ProviderKind, Translator] = {
    ProviderKind.ANTHROPIC: translate_anthropic,
    ProviderKind.OPENAI: translate_openai_chat,
    ProviderKind.OPENAI_RESPONSES: translate_openai_responses,
    ProviderKind.GEMINI: translate_gemini,
    ProviderKind.GITHUB: translate_github,
}


def translate(kind: ProviderKind, conversation: Conversation) -> ProviderRequest:
    return TRANSLATORS[kind](conversation)


__all__ = [
    "Conversation",
    "FileSnippet",
    "ProviderRequest",
    "TRANSLATORS",
    "Translator",
    "Turn",
    "translate",
]
