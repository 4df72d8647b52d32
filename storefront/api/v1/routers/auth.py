# storefront/api/v1/routers/auth.py
from fastapi import APIRouter, Depends
import logging

from storefront.api.deps import auth_dep
from storefront.api.v1.schemas.storefront import Credentials, UserOut
from storefront.domain.stores.auth_store import AuthStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Mock auth: no credential check, the submitted identity becomes the session user


@router.get("/me", response_model=UserOut)
async def me(auth: AuthStore = Depends(auth_dep)):
    return UserOut(user=auth.user)


@router.post("/login", response_model=UserOut)
async def login(body: Credentials, auth: AuthStore = Depends(auth_dep)):
    user = await auth.login(body.email, body.name)
    logger.info("Login email=%s", user.email)
    return UserOut(user=user)


@router.post("/signup", response_model=UserOut)
async def signup(body: Credentials, auth: AuthStore = Depends(auth_dep)):
    user = await auth.signup(body.email, body.name)
    logger.info("Signup email=%s", user.email)
    return UserOut(user=user)


@router.post("/logout", response_model=UserOut)
async def logout(auth: AuthStore = Depends(auth_dep)):
    await auth.logout()
    return UserOut(user=None)
