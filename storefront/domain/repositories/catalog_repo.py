# storefront/domain/repositories/catalog_repo.py

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import logging

from storefront.core.config import get_settings
from storefront.core.errors import ProductNotFoundError
from storefront.domain.models.product import Product

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent.parent / "data" / "products.json"

# Fields the model gets to see; ratings, images and reviews stay out of the prompt
PROMPT_FIELDS = ("id", "name", "category", "price", "description", "tags")


class CatalogRepo:
    """
    Read-only product catalog held in memory for the lifetime of the process.
    Queries are pure and synchronous; ordering is always catalog order.
    """

    def __init__(self, products: Iterable[Product]):
        self._products: List[Product] = list(products)
        self._by_id: Dict[int, Product] = {}
        for p in self._products:
            if p.id in self._by_id:
                raise ValueError(f"Duplicate product id in catalog: {p.id}")
            self._by_id[p.id] = p

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "CatalogRepo":
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        return cls(Product.model_validate(doc) for doc in raw)

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> List[Product]:
        return list(self._products)

    def get_by_id(self, product_id: Union[int, float]) -> Optional[Product]:
        return self._by_id.get(product_id)

    def require(self, product_id: Union[int, float]) -> Product:
        """Like get_by_id, but unknown ids raise ProductNotFoundError."""
        product = self.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError()
        return product

    def filter(self, category: Optional[str] = None, keyword: Optional[str] = None) -> List[Product]:
        """
        Case-insensitive substring filters, both optional and combined with AND:
        - category: matched against the category field
        - keyword: matched against name OR description OR any tag
        Empty strings disable the corresponding filter.
        """
        out = self._products
        if category:
            cat = category.lower()
            out = [p for p in out if cat in p.category.lower()]
        if keyword:
            kw = keyword.lower()
            out = [
                p for p in out
                if kw in p.name.lower()
                or kw in p.description.lower()
                or any(kw in tag.lower() for tag in p.tags)
            ]
        return list(out)

    def related(self, product: Product, limit: int = 3) -> List[Product]:
        """Same category (exact), excluding the product itself, first `limit` in catalog order."""
        return [p for p in self._products if p.category == product.category and p.id != product.id][:limit]

    def prompt_payload(self) -> List[Dict[str, Any]]:
        return [p.model_dump(include=set(PROMPT_FIELDS)) for p in self._products]


@lru_cache
def get_catalog() -> CatalogRepo:
    """Load the catalog once per process (CATALOG_PATH override or the bundled file)."""
    settings = get_settings()
    path = settings.CATALOG_PATH or BUNDLED_CATALOG
    catalog = CatalogRepo.from_json(path)
    logger.info("Catalog loaded from %s: %s products", path, len(catalog))
    return catalog
