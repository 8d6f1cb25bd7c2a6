from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class ProviderKind(str, Enum):
    """
    Upstream provider families this gateway can translate for.
    """

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OPENAI_RESPONSES = "openai-responses"
    GEMINI = "gemini"
    GITHUB = "github"


# Route slugs -> provider kind. Legacy agent names stay routable.
PROVIDER_SLUGS: Dict[str, ProviderKind] = {
    "anthropic": ProviderKind.ANTHROPIC,
    "openai": ProviderKind.OPENAI,
    "chatgpt": ProviderKind.OPENAI,
    "openai-responses": ProviderKind.OPENAI_RESPONSES,
    "gemini": ProviderKind.GEMINI,
    "googleai": ProviderKind.GEMINI,
    "github": ProviderKind.GITHUB,
}

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_RESPONSES_URL = "https://api.openai.com/v1/responses"
GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
GITHUB_MODELS_URL = "https://models.github.ai/inference/chat/completions"

# Label used in normalized error text, e.g. "OpenAI API Error: ...".
PROVIDER_LABELS: Dict[ProviderKind, str] = {
    ProviderKind.ANTHROPIC: "Anthropic",
    ProviderKind.OPENAI: "OpenAI",
    ProviderKind.OPENAI_RESPONSES: "OpenAI",
    ProviderKind.GEMINI: "GoogleAI",
    ProviderKind.GITHUB: "GitHub",
}


def resolve_provider(slug: str) -> Optional[ProviderKind]:
    return PROVIDER_SLUGS.get(slug.strip().lower())


__all__ = [
    "ANTHROPIC_MESSAGES_URL",
    "GEMINI_URL_TEMPLATE",
    "GITHUB_MODELS_URL",
    "OPENAI_CHAT_URL",
    "OPENAI_RESPONSES_URL",
    "PROVIDER_LABELS",
    "PROVIDER_SLUGS",
    "ProviderKind",
    "resolve_provider",
]
