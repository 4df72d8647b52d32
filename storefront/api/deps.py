# storefront/api/deps.py
from typing import AsyncIterator

from fastapi import Depends, Header

from storefront.core.config import get_settings
from storefront.db.storage import KeyValueStorage, get_storage
from storefront.domain.repositories.catalog_repo import CatalogRepo, get_catalog
from storefront.domain.services.llm import TextGenerator, get_llm_client
from storefront.domain.stores.auth_store import AuthStore
from storefront.domain.stores.base import DEFAULT_SESSION
from storefront.domain.stores.cart_store import CartStore
from storefront.domain.stores.history_store import SearchHistoryStore
from storefront.domain.stores.wishlist_store import WishlistStore

# Shared singletons (overridable in tests through app.dependency_overrides).
# Async so they resolve on the event loop instead of the threadpool.
async def storage_dep() -> KeyValueStorage:
    return get_storage()

async def catalog_dep() -> CatalogRepo:
    return get_catalog()

async def llm_dep() -> TextGenerator:
    return get_llm_client()

# Browser session owning the client stores
async def session_id(
    x_session_id: str = Header(default=DEFAULT_SESSION, min_length=1, max_length=128),
) -> str:
    return x_session_id

# Per-request stores: slot locked for the whole request, loaded once, persisted on every mutation
async def cart_dep(storage: KeyValueStorage = Depends(storage_dep), sid: str = Depends(session_id)) -> AsyncIterator[CartStore]:
    async with CartStore.open(storage, sid) as cart:
        yield cart

async def wishlist_dep(storage: KeyValueStorage = Depends(storage_dep), sid: str = Depends(session_id)) -> AsyncIterator[WishlistStore]:
    async with WishlistStore.open(storage, sid) as wishlist:
        yield wishlist

async def auth_dep(storage: KeyValueStorage = Depends(storage_dep), sid: str = Depends(session_id)) -> AsyncIterator[AuthStore]:
    async with AuthStore.open(storage, sid) as auth:
        yield auth

async def history_dep(storage: KeyValueStorage = Depends(storage_dep), sid: str = Depends(session_id)) -> AsyncIterator[SearchHistoryStore]:
    async with SearchHistoryStore.open(storage, sid, limit=get_settings().search_history_limit) as history:
        yield history
