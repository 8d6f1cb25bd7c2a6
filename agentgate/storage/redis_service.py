"""
Redis-backed staging store for conversation fragments.

Every session owns a small group of keys:

    agentgate:session:{session_id}:meta               hash, created_at
    agentgate:session:{session_id}:seq                integer sequence counter
    agentgate:session:{session_id}:fragments:{kind}   sorted set, score = sequence

Fragment writes are pure inserts. Readers resolve scalar kinds to the
member with the highest sequence and replay messages in ascending order.
"""

from __future__ import annotations

import time
from typing import List, Optional

from redis.asyncio import Redis

from agentgate.models import Fragment, FragmentKind, SessionSnapshot, StagedMessage
from agentgate.redis_client import decode_json_members, encode_json, redis_delete
from agentgate.settings import settings

SESSION_PREFIX_TEMPLATE = "agentgate:session:{session_id}"
SESSION_META_KEY_TEMPLATE = SESSION_PREFIX_TEMPLATE + ":meta"
SESSION_SEQ_KEY_TEMPLATE = SESSION_PREFIX_TEMPLATE + ":seq"
SESSION_FRAGMENTS_KEY_TEMPLATE = SESSION_PREFIX_TEMPLATE + ":fragments:{kind}"

DEFAULT_CONVERSATION = "default"


def build_session_id(provider_slug: str, conversation: Optional[str] = None) -> str:
    """
    Compose the session id from the provider route and the optional
    X-Session-Id header value.
    """
    conversation = (conversation or "").strip() or DEFAULT_CONVERSATION
    return f"{provider_slug}:{conversation}"


def _fragments_key(session_id: str, kind: FragmentKind) -> str:
    return SESSION_FRAGMENTS_KEY_TEMPLATE.format(session_id=session_id, kind=kind.value)


def _session_keys(session_id: str) -> List[str]:
    keys = [
        SESSION_META_KEY_TEMPLATE.format(session_id=session_id),
        SESSION_SEQ_KEY_TEMPLATE.format(session_id=session_id),
    ]
    keys.extend(_fragments_key(session_id, kind) for kind in FragmentKind)
    return keys


def _to_fragment(kind: FragmentKind, data: dict) -> Optional[Fragment]:
    try:
        return Fragment(
            kind=kind,
            sequence=int(data.get("sequence", 0)),
            role=str(data.get("role") or ""),
            content=str(data.get("content") or ""),
        )
    except (TypeError, ValueError):
        return None


async def ensure_session(redis: Redis, session_id: str) -> None:
    """
    Create the session metadata hash if it does not exist yet.
    Safe to call on every write.
    """
    key = SESSION_META_KEY_TEMPLATE.format(session_id=session_id)
    await redis.hsetnx(key, "created_at", str(time.time()))
    await redis.expire(key, settings.session_ttl_seconds)


async def next_sequence(redis: Redis, session_id: str) -> int:
    key = SESSION_SEQ_KEY_TEMPLATE.format(session_id=session_id)
    value = await redis.incr(key)
    await redis.expire(key, settings.session_ttl_seconds)
    return int(value)


async def append_fragment(redis: Redis, session_id: str, fragment: Fragment) -> None:
    """
    Insert a fragment into its kind's sorted set. Never reads prior state.
    """
    key = _fragments_key(session_id, fragment.kind)
    member = encode_json(
        {
            "sequence": fragment.sequence,
            "role": fragment.role,
            "content": fragment.content,
        }
    )
    await redis.zadd(key, {member: fragment.sequence})
    await redis.expire(key, settings.session_ttl_seconds)


async def list_fragments(
    redis: Redis, session_id: str, kind: FragmentKind
) -> List[Fragment]:
    """
    Return all fragments of one kind in ascending sequence order.
    """
    raw = await redis.zrange(_fragments_key(session_id, kind), 0, -1)
    fragments: List[Fragment] = []
    for data in decode_json_members(raw):
        fragment = _to_fragment(kind, data)
        if fragment is not None:
            fragments.append(fragment)
    fragments.sort(key=lambda f: f.sequence)
    return fragments


async def latest_fragment(
    redis: Redis, session_id: str, kind: FragmentKind
) -> Optional[Fragment]:
    """
    Return the most recently written fragment of `kind`, or None.
    """
    raw = await redis.zrevrange(_fragments_key(session_id, kind), 0, 0)
    for data in decode_json_members(raw):
        fragment = _to_fragment(kind, data)
        if fragment is not None:
            return fragment
    return None


def _parse_float(fragment: Optional[Fragment]) -> Optional[float]:
    if fragment is None or not fragment.content:
        return None
    try:
        return float(fragment.content)
    except ValueError:
        return None


async def load_snapshot(redis: Redis, session_id: str) -> SessionSnapshot:
    """
    Read back everything staged for the session.

    Order: model, system instruction, messages, temperature, top_p, api key.
    """
    model = await latest_fragment(redis, session_id, FragmentKind.MODEL_TO_USE)
    instruction = await latest_fragment(redis, session_id, FragmentKind.SYSTEM_INSTRUCTION)
    messages = await list_fragments(redis, session_id, FragmentKind.MESSAGE)
    temperature = await latest_fragment(redis, session_id, FragmentKind.TEMPERATURE)
    top_p = await latest_fragment(redis, session_id, FragmentKind.TOP_P)
    api_key = await latest_fragment(redis, session_id, FragmentKind.API_KEY)

    return SessionSnapshot(
        session_id=session_id,
        model=(model.content or None) if model else None,
        system_instruction=instruction.content if instruction else "",
        messages=[StagedMessage(role=m.role, content=m.content) for m in messages],
        temperature=_parse_float(temperature),
        top_p=_parse_float(top_p),
        api_key=(api_key.content or None) if api_key else None,
    )


async def clear_session(redis: Redis, session_id: str) -> int:
    """
    Purge every key of the session, sequence counter included.
    """
    return await redis_delete(redis, *_session_keys(session_id))


__all__ = [
    "DEFAULT_CONVERSATION",
    "SESSION_FRAGMENTS_KEY_TEMPLATE",
    "SESSION_META_KEY_TEMPLATE",
    "SESSION_SEQ_KEY_TEMPLATE",
    "append_fragment",
    "build_session_id",
    "clear_session",
    "ensure_session",
    "latest_fragment",
    "list_fragments",
    "load_snapshot",
    "next_sequence",
]
