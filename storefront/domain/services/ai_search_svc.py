# storefront/domain/services/ai_search_svc.py

from __future__ import annotations
from typing import Any, Iterable, List, Optional, Union
import json
import logging
import re
import time

from pydantic import ValidationError

from storefront.core.errors import AIServiceUnavailableError, InvalidInputError
from storefront.domain.models.ai import AIMatchResult, AISearchResult, MatchParsed, MatchRejected, ParseOutcome
from storefront.domain.models.product import Product
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.llm import TextGenerator
from storefront.domain.services.prompts import search_prompt

logger = logging.getLogger(__name__)

# First fenced block (``` or ```json), non-greedy up to the closing fence
_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
# Greedy: first "{" to last "}"
_BRACE_SPAN_RE = re.compile(r"\{[\s\S]*\}")

# =============================================================================
#                               PARSING
# =============================================================================

def extract_match(text: str) -> ParseOutcome:
    """
    Tolerant extraction of {"productIds": [...], "summary": "..."} from a model reply.

    1) If there is a fenced code block, only its content is considered.
    2) The span from the first "{" to the last "}" is parsed as JSON.
    3) The result must be an object with a numeric list `productIds` and a string `summary`.
    Returns MatchParsed on success, MatchRejected with a reason otherwise. Never raises.
    """
    fence = _CODE_FENCE_RE.search(text or "")
    working = fence.group(1) if fence else (text or "")

    span = _BRACE_SPAN_RE.search(working)
    if not span:
        return MatchRejected("No JSON object found in response")

    try:
        parsed = json.loads(span.group(0))
    except json.JSONDecodeError as e:
        return MatchRejected(f"Invalid JSON: {e}")

    if not isinstance(parsed, dict):
        return MatchRejected("JSON value is not an object")

    try:
        match = AIMatchResult.model_validate(parsed)
    except ValidationError as e:
        return MatchRejected(f"Invalid JSON structure from AI: {e.error_count()} error(s)")
    return MatchParsed(match)


def resolve_products(product_ids: Iterable[Union[int, float]], catalog: CatalogRepo) -> List[Product]:
    """Map ids back to catalog products in the order given; unknown ids are dropped."""
    out: List[Product] = []
    for pid in product_ids:
        product = catalog.get_by_id(pid)
        if product is None:
            logger.debug("AI returned unknown product id=%s, dropped", pid)
            continue
        out.append(product)
    return out

# =============================================================================
#                               PUBLIC API
# =============================================================================

def validate_query(raw: Any) -> str:
    """Accept only non-blank strings; returns the trimmed query."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInputError("Query must be a non-empty string")
    return raw.strip()


async def ai_search(
    query: str,
    *,
    catalog: CatalogRepo,
    llm: TextGenerator,
    request_id: Optional[str] = None,
) -> AISearchResult:
    """
    Natural-language search over the catalog delegated to the model.
    One call, no retry. Call failures and unparseable replies both raise
    AIServiceUnavailableError; the upstream detail only goes to the logs.
    """
    query = validate_query(query)
    prompt = search_prompt(query, catalog.prompt_payload())
    logger.info(f"AI search start query={query!r} catalog={len(catalog)} prompt_size={(len(prompt)/1024):.1f}KB")

    t0 = time.perf_counter()
    try:
        text = await llm.generate(prompt)
    except Exception as e:
        logger.error(f"AI search call failed model={getattr(llm, 'model', '?')}: {e}")
        raise AIServiceUnavailableError() from e

    outcome = extract_match(text)
    if not isinstance(outcome, MatchParsed):
        logger.error(f"AI search reply rejected: {outcome.reason}")
        logger.debug(f"AI search raw reply preview: {(text or '')[:500]}")
        raise AIServiceUnavailableError()

    products = resolve_products(outcome.match.product_ids, catalog)
    logger.info(
        f"AI search done ids={outcome.match.product_ids} resolved={len(products)} "
        f"elapsed={time.perf_counter() - t0:.3f}s"
    )
    return AISearchResult(products=products, summary=outcome.match.summary, request_id=request_id)
