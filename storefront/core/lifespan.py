# storefront/core/lifespan.py
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from storefront.db import redis as r
from storefront.db import storage
from storefront.core.config import get_settings
from storefront.domain.repositories.catalog_repo import get_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Catalog is mandatory: fail fast on a broken file
    catalog = get_catalog()
    logger.info("Catalog ready: %s products", len(catalog))

    # Redis optional, memory storage otherwise
    if settings.REDIS_URL:
        await r.connect()
    else:
        logger.warning("No REDIS_URL provided, client stores kept in process memory")
    storage.configure(r.get_redis(), ttl=settings.session_ttl)

    # Application runs
    yield

    # --- Shutdown ---
    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect failed: %s", e)
