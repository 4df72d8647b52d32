import asyncio
import logging

import pytest

from storefront.api.deps import catalog_dep
from storefront.core.errors import ProductNotFoundError
from storefront.domain.models.product import Product
from storefront.domain.repositories.catalog_repo import CatalogRepo, get_catalog
from storefront.domain.services.sorting import sort_products


def _matches_keyword(p, kw):
    kw = kw.lower()
    return kw in p.name.lower() or kw in p.description.lower() or any(kw in t.lower() for t in p.tags)

# Every product is found by its own id
def test_lookup_by_id_returns_same_product(catalog):
    for p in catalog.all():
        assert catalog.get_by_id(p.id) == p
        assert catalog.require(p.id) is p

def test_unknown_id_is_not_found(catalog):
    assert catalog.get_by_id(9999) is None
    with pytest.raises(ProductNotFoundError):
        catalog.require(9999)

# Category is a case-insensitive substring match
def test_category_substring_case_insensitive(catalog):
    out = catalog.filter(category="lap")
    assert out
    assert all(p.category == "Laptops" for p in out)
    assert {p.id for p in out} == {p.id for p in catalog.all() if p.category == "Laptops"}
    assert [p.id for p in catalog.filter(category="LAPTOPS")] == [p.id for p in out]

# Keyword hits name, description or tags, nothing else
def test_keyword_union_of_fields(catalog):
    out = catalog.filter(keyword="Fitness")
    assert {p.id for p in out} == {5, 12, 13}
    assert all(_matches_keyword(p, "fitness") for p in out)

def test_keyword_never_returns_non_matching(catalog):
    for kw in ("wireless", "4k", "budget", "zzz-nothing"):
        expected = [p.id for p in catalog.all() if _matches_keyword(p, kw)]
        assert [p.id for p in catalog.filter(keyword=kw)] == expected

def test_category_and_keyword_combine(catalog):
    out = catalog.filter(category="headphones", keyword="sport")
    assert [p.id for p in out] == [5]

def test_empty_filters_return_full_catalog_in_order(catalog):
    assert [p.id for p in catalog.filter()] == [p.id for p in catalog.all()]
    assert [p.id for p in catalog.filter(category="", keyword="")] == [p.id for p in catalog.all()]

def test_related_same_category_excluding_self(catalog):
    laptop = catalog.require(1)
    related = catalog.related(laptop, limit=3)
    assert [p.id for p in related] == [2, 3]
    assert catalog.related(laptop, limit=1) == [catalog.require(2)]

def test_prompt_payload_excludes_ratings_images_reviews(catalog):
    payload = catalog.prompt_payload()
    assert len(payload) == len(catalog)
    assert list(payload[0].keys()) == ["id", "name", "category", "price", "description", "tags"]

def test_duplicate_ids_rejected():
    p = Product(id=1, name="A", category="X", price=1.0, description="d")
    with pytest.raises(ValueError):
        CatalogRepo([p, p])

# Sorting is a separate, stable step
def test_sort_products(catalog):
    products = catalog.all()
    assert sort_products(products) == products
    prices = [p.price for p in sort_products(products, "price_asc")]
    assert prices == sorted(prices)
    prices = [p.price for p in sort_products(products, "price_desc")]
    assert prices == sorted(prices, reverse=True)
    ratings = [p.rating for p in sort_products(products, "rating")]
    assert ratings == sorted(ratings, reverse=True)

async def test_catalog_dependency_loads_once_under_concurrency(caplog):
    get_catalog.cache_clear()
    with caplog.at_level(logging.INFO, logger="storefront.domain.repositories.catalog_repo"):
        catalogs = await asyncio.gather(*(catalog_dep() for _ in range(10)))
    assert len({id(c) for c in catalogs}) == 1
    assert sum("Catalog loaded" in r.getMessage() for r in caplog.records) == 1
