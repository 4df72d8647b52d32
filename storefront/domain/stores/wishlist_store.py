# storefront/domain/stores/wishlist_store.py
from __future__ import annotations
from typing import ClassVar, List

from pydantic import TypeAdapter

from storefront.domain.models.product import Product
from storefront.domain.stores.base import PersistedStore


class WishlistStore(PersistedStore[List[Product]]):
    """Set of product snapshots keyed by product id, insertion ordered."""
    SLOT: ClassVar[str] = "wishlist_items"
    adapter: ClassVar[TypeAdapter] = TypeAdapter(List[Product])

    @classmethod
    def empty(cls) -> List[Product]:
        return []

    @property
    def items(self) -> List[Product]:
        return list(self._state)

    def contains(self, product_id: int) -> bool:
        return any(p.id == product_id for p in self._state)

    async def add(self, product: Product) -> None:
        if self.contains(product.id):
            return
        self._state.append(product)
        await self._persist()

    async def remove(self, product_id: int) -> None:
        if not self.contains(product_id):
            return
        self._state = [p for p in self._state if p.id != product_id]
        await self._persist()
