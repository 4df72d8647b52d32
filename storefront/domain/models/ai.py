from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import ConfigDict, StrictFloat, StrictInt, StrictStr

from storefront.domain.models.base import CamelModel
from storefront.domain.models.product import Product


class AIMatchResult(CamelModel):
    """
    Validated model reply for a natural-language search:
      {"productIds": [1, 2], "summary": "..."}
    Strict types: a string id, a boolean or a missing summary is a parse failure.
    Keys are matched by their camelCase name only (`product_ids` is rejected).
    """
    model_config = ConfigDict(populate_by_name=False)

    product_ids: List[Union[StrictInt, StrictFloat]]
    summary: StrictStr


@dataclass(frozen=True)
class MatchParsed:
    match: AIMatchResult
    ok: bool = True


@dataclass(frozen=True)
class MatchRejected:
    reason: str
    ok: bool = False


# Tagged outcome of parsing a raw model reply
ParseOutcome = Union[MatchParsed, MatchRejected]


@dataclass(frozen=True)
class AISearchResult:
    products: List[Product]
    summary: str
    request_id: Optional[str] = None
