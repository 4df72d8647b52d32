from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import logging, os

from storefront.core.config import get_settings
from storefront.core.errors import (
    StorefrontError,
    storefront_error_handler,
    unexpected_error_handler,
    validation_error_handler,
)
from storefront.core.lifespan import lifespan
from storefront.core.logging import configure_logging
from storefront.api.v1.routers.health import router as health_router
from storefront.api.v1.routers.products import router as products_router
from storefront.api.v1.routers.ask import router as ask_router
from storefront.api.v1.routers.pitch import router as pitch_router
from storefront.api.v1.routers.cart import router as cart_router
from storefront.api.v1.routers.wishlist import router as wishlist_router
from storefront.api.v1.routers.auth import router as auth_router
from storefront.api.v1.routers.history import router as history_router

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS from env (CSV), e.g. ALLOWED_ORIGINS="https://shop.example.com,http://localhost:3000"
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins if allowed_origins else [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],                            # includes X-Session-Id
    max_age=86400,
)

# ------- Errors -------
app.add_exception_handler(StorefrontError, storefront_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unexpected_error_handler)

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router, prefix=settings.api_prefix)
app.include_router(ask_router, prefix=settings.api_prefix)        # AI search
app.include_router(pitch_router, prefix=settings.api_prefix)      # AI pitch
app.include_router(cart_router, prefix=settings.api_prefix)
app.include_router(wishlist_router, prefix=settings.api_prefix)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(history_router, prefix=settings.api_prefix)
