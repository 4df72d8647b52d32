from fastapi.testclient import TestClient

from storefront.api.deps import catalog_dep
from storefront.main import app


def test_list_all_products(client, catalog):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body] == [p.id for p in catalog.all()]
    assert {"imageUrl", "reviews", "rating", "tags"} <= set(body[0])

def test_lookup_by_id(client):
    r = client.get("/api/products", params={"id": "4"})
    assert r.status_code == 200
    assert r.json()["name"] == "SonicWave ANC Headphones"

# id short-circuits the other filters
def test_id_ignores_other_filters(client):
    r = client.get("/api/products", params={"id": "4", "category": "cameras", "q": "nothing"})
    assert r.status_code == 200
    assert r.json()["id"] == 4

def test_lookup_unknown_id_is_404(client):
    for raw in ("999", "abc"):
        r = client.get("/api/products", params={"id": raw})
        assert r.status_code == 404
        assert r.json() == {"error": "Product not found"}

def test_category_and_keyword_filters(client):
    r = client.get("/api/products", params={"category": "lap"})
    assert {p["category"] for p in r.json()} == {"Laptops"}
    r = client.get("/api/products", params={"q": "FITNESS"})
    assert [p["id"] for p in r.json()] == [5, 12, 13]
    r = client.get("/api/products", params={"q": "no-such-thing"})
    assert r.json() == []

def test_sorting_is_applied_after_filtering(client):
    r = client.get("/api/products", params={"category": "laptops", "sort": "price_asc"})
    assert [p["id"] for p in r.json()] == [3, 1, 2]
    r = client.get("/api/products", params={"sort": "bogus"})
    assert r.status_code == 400

def test_related_products(client):
    r = client.get("/api/products/2/related")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [1, 3]
    assert client.get("/api/products/999/related").status_code == 404

def test_submit_review(client):
    r = client.post("/api/products/4/reviews", json={"author": "Zoe", "rating": 5, "text": "Love them"})
    assert r.status_code == 201
    body = r.json()
    assert body["review"]["author"] == "Zoe"
    assert body["review"]["id"].isdigit()
    assert body["reviews"][0] == body["review"]
    assert len(body["reviews"]) == 3
    # nothing persisted on the catalog
    assert len(client.get("/api/products", params={"id": "4"}).json()["reviews"]) == 2

def test_submit_review_validation(client):
    bad = [
        {"author": "", "rating": 5, "text": "x"},
        {"author": "Zoe", "rating": 0, "text": "x"},
        {"author": "Zoe", "rating": 6, "text": "x"},
        {"author": "Zoe", "rating": "5", "text": "x"},
        {"author": "Zoe", "rating": 4, "text": "   "},
    ]
    for payload in bad:
        r = client.post("/api/products/4/reviews", json=payload)
        assert r.status_code == 400, payload
        assert "error" in r.json()
    r = client.post("/api/products/999/reviews", json={"author": "Zoe", "rating": 4, "text": "ok"})
    assert r.status_code == 404

def test_unexpected_failure_is_500():
    def broken_catalog():
        raise RuntimeError("disk on fire")
    app.dependency_overrides[catalog_dep] = broken_catalog
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/api/products")
        assert r.status_code == 500
        assert r.json() == {"error": "Internal server error"}
    finally:
        app.dependency_overrides.clear()

def test_health(client, catalog):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["checks"]["storage"] == "memory"
    assert body["checks"]["catalog_size"] == len(catalog)
    assert body["checks"]["redis"] == "skipped"
