# storefront/domain/services/llm.py

from __future__ import annotations
from functools import lru_cache
from time import monotonic as _now
from typing import Optional, Protocol
import logging

from openai import AsyncOpenAI

from storefront.core.config import get_settings

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns one prompt into free-form text (one round trip)."""
    model: str

    async def generate(self, prompt: str) -> str: ...


class LLMClient:
    """
    Thin wrapper around the OpenAI-compatible chat completions API.
    One call per prompt: no retries, no streaming. Errors propagate to the
    gateways, which map them to AIServiceUnavailableError.
    """

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None, timeout_s: Optional[float] = None):
        self.model = model
        self.timeout_s = timeout_s
        self._client: Optional[AsyncOpenAI] = None
        self._api_key = api_key
        self._base_url = base_url or None

    @property
    def client(self) -> AsyncOpenAI:
        # Built lazily so a missing key only fails the AI endpoints
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url, max_retries=0)
        return self._client

    async def generate(self, prompt: str) -> str:
        t0 = _now()
        kwargs = {"timeout": self.timeout_s} if self.timeout_s else {}
        resp = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        dt = _now() - t0
        # Best-effort usage logging
        u = getattr(resp, "usage", None)
        logger.info(
            f"LLM call model={getattr(resp, 'model', self.model)} duration={dt:.3f}s "
            f"tokens(prompt={getattr(u, 'prompt_tokens', None)}, completion={getattr(u, 'completion_tokens', None)})"
        )
        return resp.choices[0].message.content or ""


@lru_cache
def get_llm_client() -> LLMClient:
    settings = get_settings()
    return LLMClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.LLM_MODEL,
        base_url=settings.OPENAI_BASE_URL,
        timeout_s=settings.openai_timeout_s,
    )
