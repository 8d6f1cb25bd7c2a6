"""
Shared test doubles.
"""

from __future__ import annotations

from typing import Any, Dict, List

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """
    Minimal async Redis replacement used for tests.
    Supports the subset of commands used by the staging and workspace stores.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self.ttls: Dict[str, int] = {}

    async def get(self, key: str):
        return self._data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None):
        self._data[key] = value
        if ex is not None:
            self.ttls[key] = ex

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if key in self._data:
                removed += 1
            self._data.pop(key, None)
            self.ttls.pop(key, None)
        return removed

    async def exists(self, key: str) -> int:
        return 1 if key in self._data else 0

    async def expire(self, key: str, seconds: int) -> bool:
        if key not in self._data:
            return False
        self.ttls[key] = seconds
        return True

    async def incr(self, key: str) -> int:
        value = int(self._data.get(key, 0)) + 1
        self._data[key] = str(value)
        return value

    # Hashes
    async def hsetnx(self, key: str, field: str, value: str) -> int:
        bucket = self._data.setdefault(key, {})
        if field in bucket:
            return 0
        bucket[field] = value
        return 1

    async def hset(self, key: str, field: str, value: str) -> int:
        bucket = self._data.setdefault(key, {})
        created = 0 if field in bucket else 1
        bucket[field] = value
        return created

    async def hget(self, key: str, field: str):
        return self._data.get(key, {}).get(field)

    async def hgetall(self, key: str) -> Dict[str, str]:
        return dict(self._data.get(key, {}))

    # Lists
    async def rpush(self, key: str, *values: str) -> int:
        lst = self._data.setdefault(key, [])
        lst.extend(values)
        return len(lst)

    async def lrange(self, key: str, start: int, end: int) -> List[str]:
        lst = self._data.get(key, [])
        slice_end = None if end == -1 else end + 1
        return lst[start:slice_end]

    # Sorted sets
    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        zset = self._data.setdefault(key, {})
        added = 0
        for member, score in mapping.items():
            if member not in zset:
                added += 1
            zset[member] = float(score)
        return added

    def _sorted_members(self, key: str) -> List[str]:
        zset = self._data.get(key, {})
        return [m for m, _ in sorted(zset.items(), key=lambda item: (item[1], item[0]))]

    async def zrange(self, key: str, start: int, end: int) -> List[str]:
        members = self._sorted_members(key)
        slice_end = None if end == -1 else end + 1
        return members[start:slice_end]

    async def zrevrange(self, key: str, start: int, end: int) -> List[str]:
        members = list(reversed(self._sorted_members(key)))
        slice_end = None if end == -1 else end + 1
        return members[start:slice_end]

    def keys_with_prefix(self, prefix: str) -> List[str]:
        return [k for k in self._data if k.startswith(prefix)]


class FailingRedis(FakeRedis):
    """
    Raises a RedisError on every read, to exercise the persistence error path.
    """

    async def zrange(self, key: str, start: int, end: int):
        raise RedisConnectionError("connection refused")

    async def zrevrange(self, key: str, start: int, end: int):
        raise RedisConnectionError("connection refused")
