# storefront/domain/stores/history_store.py
from __future__ import annotations
from typing import Any, ClassVar, List

from pydantic import TypeAdapter

from storefront.db.storage import KeyValueStorage
from storefront.domain.stores.base import PersistedStore

DEFAULT_HISTORY_LIMIT = 5


class SearchHistoryStore(PersistedStore[List[str]]):
    """Most recent search queries first, unique, capped at `limit`."""
    SLOT: ClassVar[str] = "search_history"
    adapter: ClassVar[TypeAdapter] = TypeAdapter(List[str])

    def __init__(self, storage: KeyValueStorage, key: str, state: List[str], limit: int = DEFAULT_HISTORY_LIMIT, **kw: Any):
        super().__init__(storage, key, state)
        self.limit = limit

    @classmethod
    def empty(cls) -> List[str]:
        return []

    @property
    def queries(self) -> List[str]:
        return list(self._state)

    async def record(self, query: str) -> None:
        trimmed = (query or "").strip()
        if not trimmed:
            return
        self._state = [trimmed, *(q for q in self._state if q != trimmed)][: self.limit]
        await self._persist()

    async def clear(self) -> None:
        self._state = []
        await self.storage.delete(self.key)
