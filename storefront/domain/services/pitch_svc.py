# storefront/domain/services/pitch_svc.py
import logging
from typing import Any

from storefront.core.errors import AIServiceUnavailableError, InvalidInputError
from storefront.domain.repositories.catalog_repo import CatalogRepo
from storefront.domain.services.llm import TextGenerator
from storefront.domain.services.prompts import pitch_prompt

logger = logging.getLogger(__name__)


def validate_product_id(raw: Any):
    """A product id must be a non-zero number; booleans and strings are rejected."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not raw:
        raise InvalidInputError("Valid productId is required")
    return raw


async def generate_pitch(product_id: Any, *, catalog: CatalogRepo, llm: TextGenerator) -> str:
    """
    Two-sentence sales pitch for one product.
    The reply is free text: it is trimmed and returned as-is, no validation.
    """
    product = catalog.require(validate_product_id(product_id))
    prompt = pitch_prompt(product)
    try:
        text = await llm.generate(prompt)
    except Exception as e:
        logger.error(f"Pitch call failed product_id={product.id}: {e}")
        raise AIServiceUnavailableError() from e
    pitch = (text or "").strip()
    logger.info(f"Pitch generated product_id={product.id} chars={len(pitch)}")
    return pitch
