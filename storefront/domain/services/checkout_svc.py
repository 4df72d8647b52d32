# storefront/domain/services/checkout_svc.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import random

from storefront.core.errors import InvalidInputError
from storefront.domain.stores.cart_store import CartStore

logger = logging.getLogger(__name__)

ORDER_PREFIX = "DAI"


@dataclass(frozen=True)
class CartSummary:
    total_items: int
    total_price: float
    tax: float
    grand_total: float


@dataclass(frozen=True)
class Order:
    order_number: str
    total_items: int
    grand_total: float


def summarize(cart: CartStore, tax_rate: float) -> CartSummary:
    """Totals for display; rounding to cents happens here only, never in the store."""
    total = cart.total_price
    tax = total * tax_rate
    return CartSummary(
        total_items=cart.total_items,
        total_price=round(total, 2),
        tax=round(tax, 2),
        grand_total=round(total + tax, 2),
    )


def new_order_number(rng: random.Random | None = None) -> str:
    rng = rng or random
    return f"{ORDER_PREFIX}-{rng.randint(100000, 999999)}"


async def checkout(cart: CartStore, tax_rate: float) -> Order:
    """Mock purchase: issue an order number and empty the cart. No payment happens."""
    if not cart.items:
        raise InvalidInputError("Cart is empty")
    summary = summarize(cart, tax_rate)
    order = Order(order_number=new_order_number(), total_items=summary.total_items, grand_total=summary.grand_total)
    await cart.clear()
    logger.info("Checkout order=%s items=%s total=%.2f", order.order_number, order.total_items, order.grand_total)
    return order
