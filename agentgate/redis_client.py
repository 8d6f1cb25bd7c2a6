"""
Redis helper utilities shared by the staging and workspace stores.

`agentgate.deps.get_redis` exposes the client as a FastAPI dependency.
This module owns client construction plus a few small helpers for
JSON-encoded members so the stores do not duplicate that logic.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional

from redis.asyncio import Redis

from .logging_config import logger
from .settings import settings

_redis_client: Optional[Redis] = None


def get_redis_client() -> Redis:
    """
    Return a lazily-created global Redis client.

    This is intentionally sync so it can be reused both from FastAPI
    dependencies and background tasks. The underlying driver is fully
    async and should be awaited by callers.
    """
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


def encode_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def decode_json_members(raw_members: Iterable[Any]) -> List[dict]:
    """
    Decode a list of JSON strings returned by ZRANGE/LRANGE.
    Malformed members are skipped with a warning.
    """
    decoded: List[dict] = []
    for raw in raw_members:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            value = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Skipping malformed JSON member in Redis: %r", raw)
            continue
        if isinstance(value, dict):
            decoded.append(value)
    return decoded


async def redis_delete(redis: Redis, *keys: str) -> int:
    """
    Delete keys if they exist; returns the number of keys removed.
    """
    if not keys:
        return 0
    return await redis.delete(*keys)


async def redis_touch(redis: Redis, keys: Iterable[str], ttl_seconds: int) -> None:
    """
    Refresh the TTL on every given key.
    """
    for key in keys:
        await redis.expire(key, ttl_seconds)


__all__ = [
    "get_redis_client",
    "encode_json",
    "decode_json_members",
    "redis_delete",
    "redis_touch",
]
