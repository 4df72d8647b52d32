# storefront/api/v1/routers/wishlist.py
from fastapi import APIRouter, Depends

from storefront.api.deps import catalog_dep, wishlist_dep
from storefront.api.v1.schemas.storefront import ProductRef, WishlistOut, WishlistStatus
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.stores.wishlist_store import WishlistStore

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _wishlist_out(wishlist: WishlistStore) -> WishlistOut:
    items = wishlist.items
    return WishlistOut(items=items, count=len(items))


@router.get("", response_model=WishlistOut)
async def get_wishlist(wishlist: WishlistStore = Depends(wishlist_dep)):
    return _wishlist_out(wishlist)


@router.post("", response_model=WishlistOut)
async def add_to_wishlist(body: ProductRef, wishlist: WishlistStore = Depends(wishlist_dep), catalog: CatalogRepo = Depends(catalog_dep)):
    await wishlist.add(catalog.require(body.product_id))
    return _wishlist_out(wishlist)


@router.delete("/{product_id}", response_model=WishlistOut)
async def remove_from_wishlist(product_id: int, wishlist: WishlistStore = Depends(wishlist_dep)):
    await wishlist.remove(product_id)
    return _wishlist_out(wishlist)


@router.get("/{product_id}", response_model=WishlistStatus)
async def wishlist_status(product_id: int, wishlist: WishlistStore = Depends(wishlist_dep)):
    return WishlistStatus(product_id=product_id, wishlisted=wishlist.contains(product_id))
