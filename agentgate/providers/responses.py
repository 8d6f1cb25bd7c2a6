"""
Static provider-shaped payloads: the disabled-model reply and the
normalized error reply. Both reuse each provider's success shape so
callers can parse them with their usual client code.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict

from agentgate.models.provider import PROVIDER_LABELS, ProviderKind

from .gemini import SAFETY_CATEGORIES

DISABLED_MODEL = "disabled"
DISABLED_TEXT = "This model is currently disabled."


def is_disabled_model(model: str | None) -> bool:
    return (model or "").strip().lower() == DISABLED_MODEL


def _chat_completion(*, ident: str, model: str, text: str, finish_reason: str) -> Dict[str, Any]:
    return {
        "id": ident,
        "object": "chat.completion",
        "created": int(time.time()),
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "logprobs": None,
                "finish_reason": finish_reason,
            }
        ],
        "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
        "system_fingerprint": model,
    }


def _anthropic_message(*, ident: str, model: str, text: str, stop_reason: str) -> Dict[str, Any]:
    return {
        "id": ident,
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "model": model,
        "stop_reason": stop_reason,
        "usage": {"input_tokens": 0, "output_tokens": 0},
    }


def _gemini_candidate(*, text: str, finish_reason: str) -> Dict[str, Any]:
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": finish_reason,
                "index": 0,
                "safetyRatings": [
                    {"category": category, "probability": "NEGLIGIBLE"}
                    for category in SAFETY_CATEGORIES
                ],
            }
        ],
        "usageMetadata": {
            "promptTokenCount": 0,
            "candidatesTokenCount": 0,
            "totalTokenCount": 0,
        },
    }


def _responses_object(*, ident: str, model: str, text: str, status: str) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": ident,
        "object": "response",
        "created_at": int(time.time()),
        "model": model,
        "status": status,
        "output": [
            {
                "type": "message",
                "id": f"{ident}-msg-0",
                "role": "assistant",
                "status": "completed",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ],
        "output_text": text,
        "usage": {"input_tokens": 0, "output_tokens": 0, "total_tokens": 0},
    }
    if status == "failed":
        payload["error"] = {"code": "api_error", "message": text}
    return payload


_DISABLED_BUILDERS: Dict[ProviderKind, Callable[[], Dict[str, Any]]] = {
    ProviderKind.OPENAI: lambda: _chat_completion(
        ident="model-disabled", model=DISABLED_MODEL, text=DISABLED_TEXT, finish_reason="stop"
    ),
    ProviderKind.GITHUB: lambda: _chat_completion(
        ident="model-disabled", model=DISABLED_MODEL, text=DISABLED_TEXT, finish_reason="stop"
    ),
    ProviderKind.OPENAI_RESPONSES: lambda: _responses_object(
        ident="resp_disabled", model=DISABLED_MODEL, text=DISABLED_TEXT, status="completed"
    ),
    ProviderKind.ANTHROPIC: lambda: _anthropic_message(
        ident="msg_disabled", model=DISABLED_MODEL, text=DISABLED_TEXT, stop_reason="end_turn"
    ),
    ProviderKind.GEMINI: lambda: _gemini_candidate(text=DISABLED_TEXT, finish_reason="STOP"),
}


def disabled_response(kind: ProviderKind) -> Dict[str, Any]:
    """
    Reply returned instead of calling the provider when the staged model
    is the `disabled` sentinel.
    """
    return _DISABLED_BUILDERS[kind]()


def error_response(kind: ProviderKind, message: str) -> Dict[str, Any]:
    """
    Wrap a dispatch failure in the provider's success shape with an
    error finish reason.
    """
    text = f"{PROVIDER_LABELS[kind]} API Error: {message}"
    if kind is ProviderKind.ANTHROPIC:
        return _anthropic_message(
            ident="error-response", model="error", text=text, stop_reason="error"
        )
    if kind is ProviderKind.GEMINI:
        return _gemini_candidate(text=text, finish_reason="ERROR")
    if kind is ProviderKind.OPENAI_RESPONSES:
        return _responses_object(ident="error-response", model="error", text=text, status="failed")
    return _chat_completion(ident="error-response", model="error", text=text, finish_reason="error")


__all__ = [
    "DISABLED_MODEL",
    "DISABLED_TEXT",
    "disabled_response",
    "error_response",
    "is_disabled_model",
]
