from datetime import datetime
from typing import List, Optional
import time

from storefront.core.errors import InvalidInputError
from storefront.domain.models.product import Product, Review


def _display_date(now: datetime) -> str:
    # "October 19, 2026"
    return f"{now.strftime('%B')} {now.day}, {now.year}"


def build_review(author: str, rating: int, text: str, now: Optional[datetime] = None) -> Review:
    """
    Create a review from a client submission. Reviews live only in the client
    session that submitted them; nothing is stored here.
    """
    author, text = (author or "").strip(), (text or "").strip()
    if not author or not text:
        raise InvalidInputError("Review author and text are required")
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise InvalidInputError("Rating must be an integer between 1 and 5")
    now = now or datetime.now()
    return Review(
        id=str(int(time.time() * 1000)),
        author=author,
        rating=rating,
        text=text,
        date=_display_date(now),
    )


def reviews_with(product: Product, review: Review) -> List[Review]:
    """Newest first: the submitted review, then the catalog reviews."""
    return [review, *product.reviews]
