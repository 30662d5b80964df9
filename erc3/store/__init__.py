"""Store benchmark API: products, basket, coupons and checkout."""

from erc3.store.client import StoreClient
from erc3.store.models import (
    STORE_REQUEST_MODELS,
    STORE_TOOL_DEFINITIONS,
    AddToBasket,
    ApplyCoupon,
    Basket,
    BasketCount,
    BasketItem,
    Checkout,
    ListProducts,
    Product,
    ProductPage,
    RemoveCoupon,
    RemoveFromBasket,
    StoreTool,
    ViewBasket,
)

__all__ = [
    "StoreClient",
    "StoreTool",
    "STORE_REQUEST_MODELS",
    "STORE_TOOL_DEFINITIONS",
    "ListProducts",
    "ViewBasket",
    "AddToBasket",
    "RemoveFromBasket",
    "ApplyCoupon",
    "RemoveCoupon",
    "Checkout",
    "Product",
    "ProductPage",
    "BasketItem",
    "Basket",
    "BasketCount",
]
