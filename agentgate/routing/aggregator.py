"""
Completion flow for staged sessions.

On a completion signal the session is given a short quiet period for
in-flight fragment writes to land, then read back, translated for the
provider and dispatched. The session is cleared on every exit path.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict

import httpx
from redis.asyncio import Redis

from agentgate.dispatch import dispatch, resolve_credential
from agentgate.errors import CompletionInProgress, ConfigurationMissing
from agentgate.logging_config import logger
from agentgate.models import ProviderKind, SessionSnapshot
from agentgate.providers import Conversation, Turn, translate
from agentgate.providers.responses import disabled_response, is_disabled_model
from agentgate.settings import settings
from agentgate.storage.redis_service import clear_session, load_snapshot

_LOCKS: Dict[str, asyncio.Lock] = {}


def _get_lock(session_id: str) -> asyncio.Lock:
    if session_id not in _LOCKS:
        _LOCKS[session_id] = asyncio.Lock()
    return _LOCKS[session_id]


def build_conversation(snapshot: SessionSnapshot) -> Conversation:
    if not snapshot.model:
        raise ConfigurationMissing("Model not set", field="model_to_use")
    return Conversation(
        model=snapshot.model,
        system_instruction=snapshot.system_instruction,
        temperature=snapshot.temperature,
        top_p=snapshot.top_p,
        turns=[Turn(role=m.role, content=m.content) for m in snapshot.messages],
    )


async def forward_conversation(
    client: httpx.AsyncClient,
    kind: ProviderKind,
    conversation: Conversation,
    staged_credential: str | None,
) -> Dict[str, Any]:
    """
    Translate and send one conversation. The `disabled` model sentinel
    short-circuits before any credential lookup or outbound call.
    """
    request = translate(kind, conversation)
    if is_disabled_model(conversation.model):
        logger.info("Model disabled for provider=%s; skipping dispatch", kind.value)
        return disabled_response(kind)
    credential = resolve_credential(kind, staged_credential)
    return await dispatch(client, kind, request, credential)


async def complete_session(
    redis: Redis,
    client: httpx.AsyncClient,
    kind: ProviderKind,
    session_id: str,
) -> Dict[str, Any]:
    """
    Assemble, send and clear one staged session.

    Raises CompletionInProgress when another completion for the same
    session has not finished; that session is left untouched.
    """
    lock = _get_lock(session_id)
    if lock.locked():
        raise CompletionInProgress(session_id)

    async with lock:
        try:
            if settings.quiescence_delay > 0:
                await asyncio.sleep(settings.quiescence_delay)

            snapshot = await load_snapshot(redis, session_id)
            conversation = build_conversation(snapshot)
            logger.info(
                "Completing session=%s provider=%s model=%s turns=%d",
                session_id,
                kind.value,
                conversation.model,
                len(conversation.turns),
            )
            return await forward_conversation(client, kind, conversation, snapshot.api_key)
        finally:
            await clear_session(redis, session_id)
            _LOCKS.pop(session_id, None)


__all__ = [
    "build_conversation",
    "complete_session",
    "forward_conversation",
]
