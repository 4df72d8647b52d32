from pydantic import Field

from storefront.domain.models.base import CamelModel
from storefront.domain.models.product import Product


class CartItem(CamelModel):
    product: Product
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class AuthUser(CamelModel):
    name: str
    email: str
