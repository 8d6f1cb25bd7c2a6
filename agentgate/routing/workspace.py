"""
Workspace flow: configuration and files are uploaded one call at a
time, and a prompt call sends the whole project in a single request.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict

import httpx
from redis.asyncio import Redis

from agentgate.dispatch import resolve_credential
from agentgate.errors import ConfigurationMissing, bad_request
from agentgate.logging_config import logger
from agentgate.models import ProviderKind, WorkspaceFile, WorkspaceRequest, WorkspaceState
from agentgate.providers import Conversation, FileSnippet, Turn
from agentgate.settings import settings
from agentgate.storage.workspace_service import (
    add_file,
    load_workspace,
    reset_workspace,
    set_config_value,
)

from .aggregator import forward_conversation

# Request `type` -> config hash field.
CONFIG_TYPES: Dict[str, str] = {
    "api key": "api_key",
    "system instructions": "system_instructions",
    "model": "model",
    "prompt": "prompt",
}
FILE_TYPE = "file"


def build_project_conversation(state: WorkspaceState) -> Conversation:
    if not state.model:
        raise ConfigurationMissing("Model not set", field="model")
    turns = []
    prompt = (state.prompt or "").strip()
    if prompt:
        turns.append(Turn(role="user", content=prompt))
    return Conversation(
        model=state.model,
        system_instruction=state.system_instructions,
        turns=turns,
        files=[FileSnippet(path=f.file_path, content=f.file_content) for f in state.files],
        project=True,
    )


async def store_config(
    redis: Redis, session_id: str, request_type: str, text: str | None
) -> Dict[str, Any]:
    if not text:
        raise bad_request(f"Missing text field for {request_type}")
    if request_type == "api key":
        await reset_workspace(redis, session_id)
    await set_config_value(redis, session_id, CONFIG_TYPES[request_type], text)
    return {"message": f"{request_type} stored successfully"}


async def store_file(redis: Redis, session_id: str, payload: WorkspaceRequest) -> Dict[str, Any]:
    if not payload.filename or not payload.content:
        raise bad_request("Missing filename or content for file")
    count = await add_file(
        redis,
        session_id,
        WorkspaceFile(file_path=payload.filename, file_content=payload.content),
    )
    return {"message": "File data stored successfully", "count": count}


async def run_prompt(
    redis: Redis,
    client: httpx.AsyncClient,
    kind: ProviderKind,
    session_id: str,
    text: str | None,
) -> Dict[str, Any]:
    """
    Store the prompt, then send files, instructions and prompt as one
    project conversation. The workspace stays in place afterwards.
    """
    if not text:
        raise bad_request("Missing text field for prompt")
    await set_config_value(redis, session_id, "prompt", text)

    state = await load_workspace(redis, session_id)
    credential = resolve_credential(kind, state.api_key)
    if not credential:
        raise ConfigurationMissing("API key not set", field="api_key")
    conversation = build_project_conversation(state)

    if settings.workspace_delay > 0:
        await asyncio.sleep(settings.workspace_delay)
    # Re-read so uploads that landed during the delay are included.
    state = await load_workspace(redis, session_id)
    conversation = build_project_conversation(state)

    logger.info(
        "Workspace prompt session=%s provider=%s model=%s files=%d",
        session_id,
        kind.value,
        conversation.model,
        len(conversation.files),
    )
    return await forward_conversation(client, kind, conversation, credential)


async def handle_workspace_request(
    redis: Redis,
    client: httpx.AsyncClient,
    kind: ProviderKind,
    session_id: str,
    payload: WorkspaceRequest,
) -> Dict[str, Any]:
    request_type = payload.type.strip().lower()
    if request_type == FILE_TYPE:
        return await store_file(redis, session_id, payload)
    if request_type == "prompt":
        return await run_prompt(redis, client, kind, session_id, payload.text)
    if request_type in CONFIG_TYPES:
        return await store_config(redis, session_id, request_type, payload.text)
    raise bad_request(f"Invalid type specified: {payload.type}")


__all__ = [
    "CONFIG_TYPES",
    "build_project_conversation",
    "handle_workspace_request",
    "run_prompt",
    "store_config",
    "store_file",
]
