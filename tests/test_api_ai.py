from redis.exceptions import ConnectionError as RedisConnectionError

from storefront.api.deps import storage_dep
from storefront.db.storage import MemoryStorage
from storefront.main import app

FENCED_REPLY = 'Here is the result:\n```json\n{"productIds": [1, 2], "summary": "ok"}\n```'


def test_ask_returns_products_and_summary(client, fake_llm):
    fake_llm.reply = FENCED_REPLY
    r = client.post("/api/ask", json={"query": "powerful laptops"})
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body["products"]] == [1, 2]
    assert body["summary"] == "ok"
    assert "requestId" not in body

def test_ask_drops_unknown_ids_keeps_summary(client, fake_llm):
    fake_llm.reply = '{"productIds": [404, 8], "summary": "Only one is real."}'
    r = client.post("/api/ask", json={"query": "camera"})
    assert r.status_code == 200
    assert [p["id"] for p in r.json()["products"]] == [8]
    assert r.json()["summary"] == "Only one is real."

def test_ask_echoes_request_id(client, fake_llm):
    fake_llm.reply = FENCED_REPLY
    r = client.post("/api/ask", json={"query": "laptops", "requestId": "req-7"})
    assert r.json()["requestId"] == "req-7"

def test_ask_blank_query_is_400_without_model_call(client, fake_llm):
    for payload in ({"query": ""}, {"query": "   "}, {}, {"query": 12}):
        r = client.post("/api/ask", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "Query must be a non-empty string"}
    assert fake_llm.prompts == []

def test_ask_unparseable_reply_is_502(client, fake_llm):
    fake_llm.reply = "I am not able to produce JSON today."
    r = client.post("/api/ask", json={"query": "laptop"})
    assert r.status_code == 502
    assert r.json() == {"error": "AI service unavailable"}

def test_ask_upstream_error_is_502_and_hidden(client, fake_llm):
    fake_llm.error = RuntimeError("401 invalid api key sk-secret")
    r = client.post("/api/ask", json={"query": "laptop"})
    assert r.status_code == 502
    assert "sk-secret" not in r.text

def test_ask_records_search_history(client, fake_llm):
    fake_llm.reply = FENCED_REPLY
    client.post("/api/ask", json={"query": " laptops "})
    client.post("/api/ask", json={"query": "   "})
    assert client.get("/api/history").json() == {"history": ["laptops"]}
    assert client.delete("/api/history").json() == {"history": []}
    assert client.get("/api/history").json() == {"history": []}

class DownStorage(MemoryStorage):
    """Storage whose every read fails like an unreachable Redis."""
    async def get(self, key):
        raise RedisConnectionError("connection refused")

# Search still answers when the history slot is unreachable
def test_ask_survives_history_storage_failure(client, fake_llm):
    fake_llm.reply = FENCED_REPLY
    app.dependency_overrides[storage_dep] = lambda: DownStorage()
    r = client.post("/api/ask", json={"query": "laptops"})
    assert r.status_code == 200
    assert [p["id"] for p in r.json()["products"]] == [1, 2]
    assert len(fake_llm.prompts) == 1

def test_pitch_ok(client, fake_llm):
    fake_llm.reply = "  Best sound you will own. Period.  "
    r = client.post("/api/pitch", json={"productId": 4})
    assert r.status_code == 200
    assert r.json() == {"pitch": "Best sound you will own. Period."}
    assert "Name: SonicWave ANC Headphones" in fake_llm.prompts[0]

def test_pitch_errors(client, fake_llm):
    for payload in ({}, {"productId": "4"}, {"productId": 0}, {"productId": True}, {"product_id": 4}):
        r = client.post("/api/pitch", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "Valid productId is required"}
    r = client.post("/api/pitch", json={"productId": 999})
    assert r.status_code == 404
    assert fake_llm.prompts == []
    fake_llm.error = ConnectionError("down")
    r = client.post("/api/pitch", json={"productId": 4})
    assert r.status_code == 502
    assert r.json() == {"error": "AI service unavailable"}

def test_malformed_body_is_400(client):
    r = client.post("/api/ask", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
