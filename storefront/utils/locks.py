# storefront/utils/locks.py
from __future__ import annotations
from typing import Optional
from redis.asyncio import Redis
import asyncio
import uuid


class RedisLock:
    """
    Single-instance lock using SET NX PX, held around one store slot's
    load -> mutate -> persist cycle so concurrent requests on the same
    session apply one after the other.
    The TTL bounds how long a crashed holder can block the slot.
    """
    def __init__(self, redis: Redis, key: str, ttl_ms: int = 10_000, wait_timeout: float = 15.0, poll_interval: float = 0.02):
        self.redis = redis
        self.key = f"lock:{key}"
        self.ttl_ms = ttl_ms
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self._token: Optional[str] = None

    async def try_acquire(self) -> bool:
        token = uuid.uuid4().hex
        ok = await self.redis.set(self.key, token, nx=True, px=self.ttl_ms)
        if ok:
            self._token = token
            return True
        return False

    async def acquire(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.wait_timeout
        while not await self.try_acquire():
            if loop.time() >= deadline:
                raise TimeoutError(f"Timed out waiting for {self.key}")
            await asyncio.sleep(self.poll_interval)

    async def release(self) -> None:
        # only drop the lock we still own (it may have expired and been re-taken)
        current = await self.redis.get(self.key)
        if isinstance(current, bytes):
            current = current.decode()
        if current == self._token:
            await self.redis.delete(self.key)
        self._token = None

    async def __aenter__(self) -> "RedisLock":
        await self.acquire()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.release()
