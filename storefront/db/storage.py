from __future__ import annotations
from typing import Any, AsyncContextManager, Dict, Optional, Protocol
import asyncio
import logging

from redis.asyncio import Redis

from storefront.utils.locks import RedisLock

"""
Key-value slots that back the client stores (cart, wishlist, auth, history).
No business logic here, just raw string get/set/delete plus a per-key lock;
the stores own the JSON snapshot format.
"""

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    backend: str

    async def get(self, key: str) -> Optional[str]: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> None: ...
    def lock(self, key: str) -> AsyncContextManager[Any]: ...


class RedisStorage:
    """Slots kept in Redis, optionally expiring after `ttl` seconds."""
    backend = "redis"

    def __init__(self, redis: Redis, prefix: str = "store", ttl: Optional[int] = None):
        self.redis = redis
        self.prefix = prefix
        self.ttl = ttl

    def key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(self.key(key))

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self.key(key), value, ex=self.ttl)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self.key(key))

    def lock(self, key: str) -> RedisLock:
        return RedisLock(self.redis, self.key(key))


class MemoryStorage:
    """Slots kept in a process-local dict. Used when Redis is not available."""
    backend = "memory"

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def lock(self, key: str) -> asyncio.Lock:
        return self._locks.setdefault(key, asyncio.Lock())


_storage: KeyValueStorage | None = None


def configure(redis: Redis | None, ttl: Optional[int] = None) -> KeyValueStorage:
    """Pick the storage backend for the process: Redis when connected, memory otherwise."""
    global _storage
    if redis is not None:
        _storage = RedisStorage(redis, ttl=ttl)
    else:
        _storage = MemoryStorage()
    logger.info("Client store backend: %s", _storage.backend)
    return _storage


def get_storage() -> KeyValueStorage:
    if _storage is None:
        raise RuntimeError("Storage not initialized")
    return _storage
