"""
Redis storage for project workspaces.

    agentgate:workspace:{session_id}:config   hash: api_key, system_instructions, model, prompt
    agentgate:workspace:{session_id}:files    list of JSON {"file_path", "file_content"}
"""

from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from agentgate.models import WorkspaceFile, WorkspaceState
from agentgate.redis_client import (
    decode_json_members,
    encode_json,
    redis_delete,
    redis_touch,
)
from agentgate.settings import settings

WORKSPACE_CONFIG_KEY_TEMPLATE = "agentgate:workspace:{session_id}:config"
WORKSPACE_FILES_KEY_TEMPLATE = "agentgate:workspace:{session_id}:files"

CONFIG_FIELDS = ("api_key", "system_instructions", "model", "prompt")


def _keys(session_id: str) -> tuple[str, str]:
    return (
        WORKSPACE_CONFIG_KEY_TEMPLATE.format(session_id=session_id),
        WORKSPACE_FILES_KEY_TEMPLATE.format(session_id=session_id),
    )


async def reset_workspace(redis: Redis, session_id: str) -> int:
    return await redis_delete(redis, *_keys(session_id))


async def set_config_value(redis: Redis, session_id: str, field: str, value: str) -> None:
    if field not in CONFIG_FIELDS:
        raise ValueError(f"Unknown workspace field '{field}'")
    config_key, files_key = _keys(session_id)
    await redis.hset(config_key, field, value)
    await redis_touch(redis, (config_key, files_key), settings.workspace_ttl_seconds)


async def get_config_value(redis: Redis, session_id: str, field: str) -> Optional[str]:
    config_key, _ = _keys(session_id)
    value = await redis.hget(config_key, field)
    return value or None


async def add_file(redis: Redis, session_id: str, file: WorkspaceFile) -> int:
    """
    Append an uploaded file; returns the number of files now stored.
    """
    config_key, files_key = _keys(session_id)
    count = await redis.rpush(files_key, encode_json(file.model_dump()))
    await redis_touch(redis, (config_key, files_key), settings.workspace_ttl_seconds)
    return int(count)


async def load_workspace(redis: Redis, session_id: str) -> WorkspaceState:
    config_key, files_key = _keys(session_id)
    config = await redis.hgetall(config_key) or {}
    raw_files = await redis.lrange(files_key, 0, -1)

    files = []
    for item in decode_json_members(raw_files):
        path = item.get("file_path")
        content = item.get("file_content")
        if isinstance(path, str) and isinstance(content, str):
            files.append(WorkspaceFile(file_path=path, file_content=content))

    return WorkspaceState(
        api_key=config.get("api_key") or None,
        system_instructions=config.get("system_instructions") or "",
        model=config.get("model") or None,
        prompt=config.get("prompt") or None,
        files=files,
    )


__all__ = [
    "CONFIG_FIELDS",
    "WORKSPACE_CONFIG_KEY_TEMPLATE",
    "WORKSPACE_FILES_KEY_TEMPLATE",
    "add_file",
    "get_config_value",
    "load_workspace",
    "reset_workspace",
    "set_config_value",
]
