# storefront/domain/stores/cart_store.py
from __future__ import annotations
from typing import ClassVar, Dict, List

from pydantic import TypeAdapter

from storefront.domain.models.product import Product
from storefront.domain.models.session import CartItem
from storefront.domain.stores.base import PersistedStore


class CartStore(PersistedStore[List[CartItem]]):
    """
    Product id -> quantity, quantities always >= 1.
    Removing deletes the entry; decrease stops at 1 instead of removing.
    Totals are computed on every read.
    """
    SLOT: ClassVar[str] = "cart_items"
    adapter: ClassVar[TypeAdapter] = TypeAdapter(List[CartItem])

    @classmethod
    def empty(cls) -> List[CartItem]:
        return []

    def _index(self) -> Dict[int, int]:
        return {item.product.id: i for i, item in enumerate(self._state)}

    @property
    def items(self) -> List[CartItem]:
        return list(self._state)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._state)

    @property
    def total_price(self) -> float:
        return sum(item.line_total for item in self._state)

    def quantity_of(self, product_id: int) -> int:
        idx = self._index().get(product_id)
        return 0 if idx is None else self._state[idx].quantity

    async def add(self, product: Product) -> None:
        idx = self._index().get(product.id)
        if idx is None:
            self._state.append(CartItem(product=product, quantity=1))
        else:
            item = self._state[idx]
            self._state[idx] = item.model_copy(update={"quantity": item.quantity + 1})
        await self._persist()

    async def remove(self, product_id: int) -> None:
        before = len(self._state)
        self._state = [item for item in self._state if item.product.id != product_id]
        if len(self._state) != before:
            await self._persist()

    async def increase(self, product_id: int) -> None:
        await self._adjust(product_id, +1)

    async def decrease(self, product_id: int) -> None:
        await self._adjust(product_id, -1)

    async def _adjust(self, product_id: int, delta: int) -> None:
        idx = self._index().get(product_id)
        if idx is None:
            return
        item = self._state[idx]
        quantity = max(1, item.quantity + delta)  # floor at 1, never a removal
        if quantity != item.quantity:
            self._state[idx] = item.model_copy(update={"quantity": quantity})
            await self._persist()

    async def clear(self) -> None:
        self._state = []
        await self._persist()
