"""
Outbound provider calls.

`dispatch` never raises for provider-side problems: every failure is
classified into a short text and wrapped into the provider's own
response shape by `agentgate.providers.responses.error_response`.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

import httpx

from .logging_config import logger
from .models.provider import ProviderKind
from .providers import ProviderRequest
from .providers.responses import error_response
from .settings import settings

MISSING_CREDENTIAL_TEXT = "API key not set"
NETWORK_ERROR_TEXT = "Network error: No response received from the API."
UNKNOWN_ERROR_TEXT = "An unknown error occurred while processing your request."

GITHUB_API_VERSION = "2022-11-28"


class DispatchError(Exception):
    """
    A classified dispatch failure. `message` is the text shown to the
    caller after the provider label.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def resolve_credential(kind: ProviderKind, staged: Optional[str]) -> Optional[str]:
    """
    A credential staged with the conversation wins over the deployment
    environment. Nothing is cached between cycles.
    """
    if staged and staged.strip():
        return staged.strip()
    if kind is ProviderKind.ANTHROPIC:
        return settings.anthropic_api_key
    if kind is ProviderKind.GEMINI:
        return settings.gemini_api_key
    if kind is ProviderKind.GITHUB:
        return settings.github_token
    return settings.openai_api_key


def auth_headers(kind: ProviderKind, credential: str) -> Dict[str, str]:
    if kind is ProviderKind.ANTHROPIC:
        return {"x-api-key": credential, "anthropic-version": settings.anthropic_version}
    if kind is ProviderKind.GEMINI:
        return {"x-goog-api-key": credential}
    if kind is ProviderKind.GITHUB:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {credential}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
    return {"Authorization": f"Bearer {credential}"}


def _extract_message_from_json(obj: Any) -> Optional[str]:
    if isinstance(obj, dict):
        # OpenAI / Anthropic / Gemini: {"error": {"message": "..."}}
        if isinstance(obj.get("error"), dict):
            msg = obj["error"].get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
        msg = obj.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
        detail = obj.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
    return None


def extract_error_message(error_text: Optional[str]) -> str:
    if not error_text:
        return ""
    text = str(error_text)
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    return _extract_message_from_json(parsed) or text


async def send_request(
    client: httpx.AsyncClient,
    kind: ProviderKind,
    request: ProviderRequest,
    credential: Optional[str],
) -> Dict[str, Any]:
    """
    POST the translated request and return the parsed JSON body.
    Raises DispatchError for every failure.
    """
    if not credential:
        raise DispatchError(MISSING_CREDENTIAL_TEXT)

    headers = auth_headers(kind, credential)
    headers.update(request.headers)
    model = request.body.get("model", "-")

    start = time.perf_counter()
    try:
        resp = await client.post(request.url, json=request.body, headers=headers)
    except httpx.TransportError as exc:
        logger.warning(
            "dispatch: transport error provider=%s model=%s url=%s: %s",
            kind.value,
            model,
            request.url,
            exc,
        )
        raise DispatchError(NETWORK_ERROR_TEXT) from exc
    except httpx.HTTPError as exc:
        logger.warning(
            "dispatch: request error provider=%s model=%s: %s", kind.value, model, exc
        )
        raise DispatchError(f"Request error: {exc}") from exc
    except Exception as exc:
        logger.exception(
            "dispatch: unexpected error provider=%s model=%s", kind.value, model
        )
        raise DispatchError(UNKNOWN_ERROR_TEXT) from exc

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "dispatch: provider=%s model=%s status=%s latency_ms=%.1f",
        kind.value,
        model,
        resp.status_code,
        elapsed_ms,
    )

    if resp.status_code >= 400:
        message = extract_error_message(resp.text)
        logger.warning(
            "dispatch: provider=%s returned HTTP %s: %s",
            kind.value,
            resp.status_code,
            message,
        )
        raise DispatchError(
            f"API Error ({resp.status_code}): {message}", status_code=resp.status_code
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        logger.warning(
            "dispatch: provider=%s returned a non-JSON body: %r",
            kind.value,
            resp.text[:200],
        )
        raise DispatchError(UNKNOWN_ERROR_TEXT, status_code=resp.status_code) from exc
    return payload


async def dispatch(
    client: httpx.AsyncClient,
    kind: ProviderKind,
    request: ProviderRequest,
    credential: Optional[str],
) -> Dict[str, Any]:
    """
    Send the request and return either the provider body unchanged or a
    normalized, provider-shaped error payload.
    """
    try:
        return await send_request(client, kind, request, credential)
    except DispatchError as exc:
        return error_response(kind, exc.message)


__all__ = [
    "DispatchError",
    "MISSING_CREDENTIAL_TEXT",
    "NETWORK_ERROR_TEXT",
    "UNKNOWN_ERROR_TEXT",
    "auth_headers",
    "dispatch",
    "extract_error_message",
    "resolve_credential",
    "send_request",
]
