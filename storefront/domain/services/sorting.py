from typing import Callable, Dict, List, Literal

from storefront.domain.models.product import Product

SortKey = Literal["recommended", "price_asc", "price_desc", "rating"]

_SORTERS: Dict[str, Callable[[List[Product]], List[Product]]] = {
    "recommended": list,
    "price_asc": lambda ps: sorted(ps, key=lambda p: p.price),
    "price_desc": lambda ps: sorted(ps, key=lambda p: p.price, reverse=True),
    "rating": lambda ps: sorted(ps, key=lambda p: p.rating, reverse=True),
}


def sort_products(products: List[Product], sort: SortKey = "recommended") -> List[Product]:
    """Presentation ordering applied after retrieval. Stable; "recommended" keeps catalog order."""
    return _SORTERS[sort](products)
