from pydantic import ConfigDict, Field
from typing import List

from storefront.domain.models.base import CamelModel


class Review(CamelModel):
    id: str
    author: str
    rating: int = Field(ge=1, le=5)
    text: str
    date: str  # display string, e.g. "October 19, 2026"

    model_config = ConfigDict(frozen=True)


class Product(CamelModel):
    id: int
    name: str
    category: str
    price: float = Field(ge=0)
    description: str
    tags: List[str] = []
    rating: float = 0.0
    image_url: str = ""
    reviews: List[Review] = []

    model_config = ConfigDict(frozen=True)  # reference data, never mutated
