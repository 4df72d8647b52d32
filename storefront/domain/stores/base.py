# storefront/domain/stores/base.py
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar, Generic, Optional, TypeVar
import json
import logging

from pydantic import TypeAdapter

from storefront.db.storage import KeyValueStorage

logger = logging.getLogger(__name__)

S = TypeVar("S")

DEFAULT_SESSION = "guest"


def slot_key(slot: str, session_id: Optional[str] = None) -> str:
    return f"{slot}:{session_id or DEFAULT_SESSION}"


class PersistedStore(Generic[S]):
    """
    Client-state container bound to one storage slot.

    Lifecycle: `load()` reads the slot once (absent or corrupt -> empty state),
    every mutation writes the full snapshot back before returning.
    `open()` does the same while holding the slot's storage lock, so one
    request's read-modify-write on a session is never interleaved with another's.
    Subclasses declare SLOT, the pydantic `adapter` for their state and `empty()`.
    """
    SLOT: ClassVar[str]
    adapter: ClassVar[TypeAdapter]

    def __init__(self, storage: KeyValueStorage, key: str, state: S):
        self.storage = storage
        self.key = key
        self._state = state

    @classmethod
    def empty(cls) -> S:
        raise NotImplementedError

    @classmethod
    async def load(cls, storage: KeyValueStorage, session_id: Optional[str] = None, **kw: Any):
        key = slot_key(cls.SLOT, session_id)
        state = cls.empty()
        raw = await storage.get(key)
        if raw:
            try:
                state = cls.adapter.validate_python(json.loads(raw))
            except (ValueError, TypeError) as e:
                # Corrupt snapshot: start empty, never surface it to the client
                logger.warning("Ignoring corrupt %s snapshot at key=%s: %s", cls.SLOT, key, e)
        return cls(storage, key, state, **kw)

    @classmethod
    @asynccontextmanager
    async def open(cls, storage: KeyValueStorage, session_id: Optional[str] = None, **kw: Any) -> AsyncIterator[Any]:
        """Load under the slot's lock and hold it until the caller is done mutating."""
        async with storage.lock(slot_key(cls.SLOT, session_id)):
            yield await cls.load(storage, session_id, **kw)

    def snapshot(self) -> str:
        return json.dumps(self.adapter.dump_python(self._state, mode="json", by_alias=True), separators=(",", ":"))

    async def _persist(self) -> None:
        await self.storage.set(self.key, self.snapshot())
        logger.debug("Persisted %s key=%s", self.SLOT, self.key)
