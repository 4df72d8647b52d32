# storefront/api/v1/routers/ask.py
from fastapi import APIRouter, Depends
from redis.exceptions import RedisError
import logging
import time

from storefront.api.deps import catalog_dep, llm_dep, session_id, storage_dep
from storefront.api.v1.schemas.storefront import AskRequest, AskResponse
from storefront.core.config import get_settings
from storefront.db.storage import KeyValueStorage
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.ai_search_svc import ai_search, validate_query
from storefront.domain.services.llm import TextGenerator
from storefront.domain.stores.history_store import SearchHistoryStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai"])


async def _record_history(storage: KeyValueStorage, sid: str, query: str) -> None:
    # Search needs no stored state: a history write failure must not fail the search
    try:
        async with SearchHistoryStore.open(storage, sid, limit=get_settings().search_history_limit) as history:
            await history.record(query)
    except (RedisError, OSError, TimeoutError) as e:
        logger.warning("Search history not recorded for session=%s: %s", sid, e)


@router.post("/ask", response_model=AskResponse, response_model_exclude_none=True)
async def ask(
    body: AskRequest,
    catalog: CatalogRepo = Depends(catalog_dep),
    llm: TextGenerator = Depends(llm_dep),
    storage: KeyValueStorage = Depends(storage_dep),
    sid: str = Depends(session_id),
):
    """
    Natural-language product search.
    400 blank query (no model call), 502 model failure or unparseable reply.
    """
    query = validate_query(body.query)
    logger.info("Request: ask query=%r request_id=%s", query, body.request_id)
    start_time = time.perf_counter()

    await _record_history(storage, sid, query)
    res = await ai_search(query, catalog=catalog, llm=llm, request_id=body.request_id)

    logger.info("Response: ask count=%s elapsed_time=%.4fs", len(res.products), time.perf_counter() - start_time)
    return AskResponse(products=res.products, summary=res.summary, request_id=res.request_id)
