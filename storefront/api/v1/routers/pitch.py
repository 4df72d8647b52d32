# storefront/api/v1/routers/pitch.py
from fastapi import APIRouter, Depends
import logging
import time

from storefront.api.deps import catalog_dep, llm_dep
from storefront.api.v1.schemas.storefront import PitchRequest, PitchResponse
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.llm import TextGenerator
from storefront.domain.services.pitch_svc import generate_pitch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai"])


@router.post("/pitch", response_model=PitchResponse)
async def pitch(
    body: PitchRequest,
    catalog: CatalogRepo = Depends(catalog_dep),
    llm: TextGenerator = Depends(llm_dep),
):
    """AI sales pitch for one product: 400 bad id, 404 unknown product, 502 model failure."""
    logger.info("Request: pitch product_id=%s", body.product_id)
    start_time = time.perf_counter()
    text = await generate_pitch(body.product_id, catalog=catalog, llm=llm)
    logger.info("Response: pitch product_id=%s elapsed_time=%.4fs", body.product_id, time.perf_counter() - start_time)
    return PitchResponse(pitch=text)
