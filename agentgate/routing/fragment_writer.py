"""
Turns a fragment write body into independent staged fragments.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Tuple

from redis.asyncio import Redis

from agentgate.errors import bad_request
from agentgate.logging_config import logger
from agentgate.models import Fragment, FragmentKind, FragmentWrite, MessageRole
from agentgate.storage.redis_service import append_fragment, ensure_session, next_sequence

# Body field -> fragment kind for scalar settings.
SCALAR_FIELDS: Tuple[Tuple[str, FragmentKind], ...] = (
    ("system_instruction", FragmentKind.SYSTEM_INSTRUCTION),
    ("model_to_use", FragmentKind.MODEL_TO_USE),
    ("temperature", FragmentKind.TEMPERATURE),
    ("top_p", FragmentKind.TOP_P),
    ("api_key", FragmentKind.API_KEY),
)

ALLOWED_ROLES = frozenset(role.value for role in MessageRole)


def is_completion_signal(body: Any) -> bool:
    """
    An empty JSON object asks for the staged conversation to be sent.
    """
    return isinstance(body, dict) and not body


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def pending_fragments(payload: FragmentWrite) -> List[Tuple[FragmentKind, str, str]]:
    """
    Return (kind, role, content) for every present field. Falsy values
    are skipped the same way absent ones are.
    """
    pending: List[Tuple[FragmentKind, str, str]] = []
    for field_name, kind in SCALAR_FIELDS:
        value = getattr(payload, field_name)
        if value:
            pending.append((kind, "", _as_text(value)))

    if payload.role and payload.content:
        role = payload.role.strip().lower()
        if role not in ALLOWED_ROLES:
            raise bad_request(
                f"Invalid role '{payload.role}'",
                details={"allowed_roles": sorted(ALLOWED_ROLES)},
            )
        pending.append((FragmentKind.MESSAGE, role, payload.content))
    return pending


async def _write_one(
    redis: Redis, session_id: str, kind: FragmentKind, role: str, content: str
) -> Fragment:
    sequence = await next_sequence(redis, session_id)
    fragment = Fragment(kind=kind, sequence=sequence, role=role, content=content)
    await append_fragment(redis, session_id, fragment)
    return fragment


async def write_fragments(
    redis: Redis, session_id: str, body: Dict[str, Any]
) -> List[Fragment]:
    payload = FragmentWrite.model_validate(body)
    pending = pending_fragments(payload)
    if not pending:
        return []

    await ensure_session(redis, session_id)
    fragments = await asyncio.gather(
        *(_write_one(redis, session_id, kind, role, content) for kind, role, content in pending)
    )
    logger.debug(
        "Staged %d fragment(s) for session=%s kinds=%s",
        len(fragments),
        session_id,
        [f.kind.value for f in fragments],
    )
    return list(fragments)


__all__ = ["is_completion_signal", "pending_fragments", "write_fragments"]
