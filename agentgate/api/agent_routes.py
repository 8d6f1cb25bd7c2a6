from __future__ import annotations

from typing import Any, Dict

import httpx
from fastapi import APIRouter, Body, Depends, Header
from pydantic import ValidationError
from redis.asyncio import Redis

from agentgate.deps import get_http_client, get_redis
from agentgate.errors import (
    CompletionInProgress,
    ConfigurationMissing,
    bad_request,
    configuration_missing,
    conflict,
    not_found,
)
from agentgate.models import ProviderKind, resolve_provider
from agentgate.routing.aggregator import complete_session
from agentgate.routing.fragment_writer import is_completion_signal, write_fragments
from agentgate.storage.redis_service import build_session_id, clear_session

router = APIRouter(tags=["agents"])


def get_provider_kind(provider: str) -> ProviderKind:
    kind = resolve_provider(provider)
    if kind is None:
        raise not_found(f"Provider '{provider}' not found")
    return kind


def session_id_for(
    kind: ProviderKind = Depends(get_provider_kind),
    x_session_id: str | None = Header(default=None, alias="X-Session-Id"),
) -> str:
    return build_session_id(kind.value, x_session_id)


@router.post("/{provider}")
async def stage_or_complete(
    raw_body: Any = Body(default=None),
    kind: ProviderKind = Depends(get_provider_kind),
    session_id: str = Depends(session_id_for),
    redis: Redis = Depends(get_redis),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """
    Stage conversation fragments, or send the staged conversation when
    the body is an empty object or missing.
    """
    if raw_body is None:
        raw_body = {}
    if not isinstance(raw_body, dict):
        raise bad_request("Request body must be a JSON object")

    if is_completion_signal(raw_body):
        try:
            return await complete_session(redis, client, kind, session_id)
        except ConfigurationMissing as exc:
            raise configuration_missing(exc)
        except CompletionInProgress as exc:
            raise conflict(str(exc), details={"session_id": exc.session_id})

    try:
        await write_fragments(redis, session_id, raw_body)
    except ValidationError as exc:
        raise bad_request(
            "Invalid fragment payload",
            details={"errors": [err["msg"] for err in exc.errors()]},
        )
    return {}


@router.get("/{provider}/clear")
async def clear_staged_session(
    session_id: str = Depends(session_id_for),
    redis: Redis = Depends(get_redis),
) -> Dict[str, Any]:
    """
    Drop everything staged for the session.
    """
    await clear_session(redis, session_id)
    return {}


__all__ = ["get_provider_kind", "router", "session_id_for"]
