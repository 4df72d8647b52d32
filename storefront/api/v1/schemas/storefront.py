# api/v1/schemas/storefront.py
from typing import Annotated, Any, List, Optional

from pydantic import ConfigDict, StrictInt, StringConstraints

from storefront.domain.models.base import CamelModel
from storefront.domain.models.product import Product, Review
from storefront.domain.models.session import AuthUser, CartItem

NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# --- AI ---
class AskRequest(CamelModel):
    query: Any = None                    # validated by the search service (400 when blank)
    request_id: Optional[str] = None     # echoed back so clients can drop stale replies

class AskResponse(CamelModel):
    products: List[Product]
    summary: str
    request_id: Optional[str] = None

class PitchRequest(CamelModel):
    model_config = ConfigDict(populate_by_name=False)  # only "productId" identifies the product

    product_id: Any = None

class PitchResponse(CamelModel):
    pitch: str


# --- Catalog ---
class ReviewIn(CamelModel):
    author: str
    rating: StrictInt
    text: str

class ReviewOut(CamelModel):
    review: Review
    reviews: List[Review]


# --- Cart / wishlist ---
class ProductRef(CamelModel):
    product_id: int

class CartOut(CamelModel):
    items: List[CartItem]
    total_items: int
    total_price: float
    tax: float
    grand_total: float

class CheckoutOut(CamelModel):
    order_number: str
    total_items: int
    grand_total: float

class WishlistOut(CamelModel):
    items: List[Product]
    count: int

class WishlistStatus(CamelModel):
    product_id: int
    wishlisted: bool


# --- Auth / history ---
class Credentials(CamelModel):
    email: NonBlank
    name: NonBlank

class UserOut(CamelModel):
    user: Optional[AuthUser] = None

class HistoryOut(CamelModel):
    history: List[str]
