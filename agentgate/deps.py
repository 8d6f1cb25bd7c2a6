from typing import AsyncIterator

import httpx
from redis.asyncio import Redis

from .redis_client import get_redis_client
from .settings import settings


async def get_redis() -> Redis:
    """
    FastAPI dependency that provides the shared Redis client.

    Tests override this dependency with an in-memory fake.
    """
    return get_redis_client()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    Short-lived AsyncClient for outbound provider calls.
    """
    async with httpx.AsyncClient(timeout=settings.upstream_timeout) as client:
        yield client
