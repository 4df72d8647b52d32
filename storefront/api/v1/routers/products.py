# storefront/api/v1/routers/products.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional, Union
import logging
import re
import time

from storefront.api.deps import catalog_dep
from storefront.api.v1.schemas.storefront import ReviewIn, ReviewOut
from storefront.core.config import get_settings
from storefront.core.errors import ProductNotFoundError
from storefront.domain.models.product import Product
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.review_svc import build_review, reviews_with
from storefront.domain.services.sorting import SortKey, sort_products

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _parse_id(raw: str) -> Optional[int]:
    """Leading integer of the raw value ("12abc" -> 12), None when there is none."""
    m = _LEADING_INT_RE.match(raw)
    return int(m.group(1)) if m else None


@router.get("/products", response_model=Union[Product, List[Product]])
async def list_products(
    id: Optional[str] = Query(None, description="Exact product id; ignores the other filters"),
    category: Optional[str] = Query(None, description="Case-insensitive substring of the category"),
    q: Optional[str] = Query(None, description="Keyword matched against name, description and tags"),
    sort: SortKey = Query("recommended", description="Ordering applied after filtering"),
    catalog: CatalogRepo = Depends(catalog_dep),
):
    """
    Catalog listing.
    - `id`: single product or 404.
    - `category` / `q`: substring filters, combined with AND.
    """
    logger.info("Request: list_products id=%s category=%s q=%s sort=%s", id, category, q, sort)
    start_time = time.perf_counter()

    if id:
        pid = _parse_id(id)
        product = catalog.get_by_id(pid) if pid is not None else None
        if product is None:
            raise ProductNotFoundError()
        return product

    products = sort_products(catalog.filter(category=category, keyword=q), sort)

    logger.info("Response: list_products count=%s elapsed_time=%.4fs", len(products), time.perf_counter() - start_time)
    return products


@router.get("/products/{product_id}/related", response_model=List[Product])
async def related_products(product_id: int, catalog: CatalogRepo = Depends(catalog_dep)):
    """Other products from the same category."""
    product = catalog.require(product_id)
    return catalog.related(product, limit=get_settings().related_limit)


@router.post("/products/{product_id}/reviews", response_model=ReviewOut, status_code=201)
async def submit_review(product_id: int, body: ReviewIn, catalog: CatalogRepo = Depends(catalog_dep)):
    """
    Build a review for the submitting client. The review is returned, not stored:
    it only lives in the session that displays it.
    """
    product = catalog.require(product_id)
    review = build_review(body.author, body.rating, body.text)
    logger.info("Review submitted product_id=%s rating=%s", product_id, review.rating)
    return ReviewOut(review=review, reviews=reviews_with(product, review))
