# storefront/domain/stores/auth_store.py
from __future__ import annotations
from typing import ClassVar, Optional

from pydantic import TypeAdapter

from storefront.domain.models.session import AuthUser
from storefront.domain.stores.base import PersistedStore


class AuthStore(PersistedStore[Optional[AuthUser]]):
    """
    Mock authentication: at most one user, no password or token.
    login and signup both just set the current user.
    """
    SLOT: ClassVar[str] = "auth_user"
    adapter: ClassVar[TypeAdapter] = TypeAdapter(Optional[AuthUser])

    @classmethod
    def empty(cls) -> Optional[AuthUser]:
        return None

    @property
    def user(self) -> Optional[AuthUser]:
        return self._state

    @property
    def is_logged_in(self) -> bool:
        return self._state is not None

    async def login(self, email: str, name: str) -> AuthUser:
        self._state = AuthUser(email=email, name=name)
        await self._persist()
        return self._state

    async def signup(self, email: str, name: str) -> AuthUser:
        return await self.login(email, name)

    async def logout(self) -> None:
        self._state = None
        await self.storage.delete(self.key)
