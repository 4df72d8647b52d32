# storefront/api/v1/routers/cart.py
from fastapi import APIRouter, Depends
import logging

from storefront.api.deps import cart_dep, catalog_dep
from storefront.api.v1.schemas.storefront import CartOut, CheckoutOut, ProductRef
from storefront.core.config import get_settings
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.checkout_svc import checkout, summarize
from storefront.domain.stores.cart_store import CartStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_out(cart: CartStore) -> CartOut:
    summary = summarize(cart, get_settings().tax_rate)
    return CartOut(
        items=cart.items,
        total_items=summary.total_items,
        total_price=summary.total_price,
        tax=summary.tax,
        grand_total=summary.grand_total,
    )


@router.get("", response_model=CartOut)
async def get_cart(cart: CartStore = Depends(cart_dep)):
    """Current cart with totals"""
    return _cart_out(cart)


@router.post("/items", response_model=CartOut)
async def add_to_cart(body: ProductRef, cart: CartStore = Depends(cart_dep), catalog: CatalogRepo = Depends(catalog_dep)):
    product = catalog.require(body.product_id)
    await cart.add(product)
    logger.info("Cart add product_id=%s quantity=%s", product.id, cart.quantity_of(product.id))
    return _cart_out(cart)


@router.delete("/items/{product_id}", response_model=CartOut)
async def remove_from_cart(product_id: int, cart: CartStore = Depends(cart_dep)):
    await cart.remove(product_id)
    return _cart_out(cart)


@router.post("/items/{product_id}/increase", response_model=CartOut)
async def increase_quantity(product_id: int, cart: CartStore = Depends(cart_dep)):
    await cart.increase(product_id)
    return _cart_out(cart)


@router.post("/items/{product_id}/decrease", response_model=CartOut)
async def decrease_quantity(product_id: int, cart: CartStore = Depends(cart_dep)):
    await cart.decrease(product_id)
    return _cart_out(cart)


@router.delete("", response_model=CartOut)
async def clear_cart(cart: CartStore = Depends(cart_dep)):
    await cart.clear()
    return _cart_out(cart)


@router.post("/checkout", response_model=CheckoutOut)
async def checkout_cart(cart: CartStore = Depends(cart_dep)):
    """Mock purchase: returns an order number and empties the cart (400 when empty)."""
    order = await checkout(cart, get_settings().tax_rate)
    return CheckoutOut(order_number=order.order_number, total_items=order.total_items, grand_total=order.grand_total)
