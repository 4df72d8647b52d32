import os

# Settings are cached at import time: pin a test environment first
os.environ["APP_ENV"] = "development"
os.environ["REDIS_URL"] = ""
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import llm_dep, storage_dep
from storefront.db.storage import MemoryStorage
from storefront.domain.repositories.catalog_repo import get_catalog
from storefront.main import app


class FakeLLM:
    """Scripted stand-in for the model: returns `reply` or raises `error`, records prompts."""
    model = "fake-model"

    def __init__(self):
        self.reply = ""
        self.error = None
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def client(storage, fake_llm):
    app.dependency_overrides[storage_dep] = lambda: storage
    app.dependency_overrides[llm_dep] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(storage, fake_llm):
    """In-loop client for firing concurrent requests (no lifespan: dependencies are overridden)."""
    app.dependency_overrides[storage_dep] = lambda: storage
    app.dependency_overrides[llm_dep] = lambda: fake_llm
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()
