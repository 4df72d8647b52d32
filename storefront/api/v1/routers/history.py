# storefront/api/v1/routers/history.py
from fastapi import APIRouter, Depends

from storefront.api.deps import history_dep
from storefront.api.v1.schemas.storefront import HistoryOut
from storefront.domain.stores.history_store import SearchHistoryStore

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryOut)
async def get_history(history: SearchHistoryStore = Depends(history_dep)):
    """Recent AI search queries of this session, newest first."""
    return HistoryOut(history=history.queries)


@router.delete("", response_model=HistoryOut)
async def clear_history(history: SearchHistoryStore = Depends(history_dep)):
    await history.clear()
    return HistoryOut(history=[])
