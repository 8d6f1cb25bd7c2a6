from __future__ import annotations

from typing import Any, Dict

import httpx
from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from agentgate.deps import get_http_client, get_redis
from agentgate.errors import ConfigurationMissing, configuration_missing
from agentgate.models import ProviderKind, WorkspaceRequest
from agentgate.routing.workspace import handle_workspace_request
from agentgate.storage.workspace_service import reset_workspace

from .agent_routes import get_provider_kind, session_id_for

router = APIRouter(tags=["workspace"])


@router.post("/{provider}/workspace")
async def workspace_request(
    payload: WorkspaceRequest,
    kind: ProviderKind = Depends(get_provider_kind),
    session_id: str = Depends(session_id_for),
    redis: Redis = Depends(get_redis),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    try:
        return await handle_workspace_request(redis, client, kind, session_id, payload)
    except ConfigurationMissing as exc:
        raise configuration_missing(exc)


@router.get("/{provider}/workspace/clear")
async def clear_workspace(
    session_id: str = Depends(session_id_for),
    redis: Redis = Depends(get_redis),
) -> Dict[str, Any]:
    await reset_workspace(redis, session_id)
    return {}


__all__ = ["router"]
