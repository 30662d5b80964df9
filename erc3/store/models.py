"""Pydantic models for store API requests and responses."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from erc3.tools import tool_definitions


class StoreTool(str, Enum):
    """Tool paths served by the store API."""
    LIST_PRODUCTS = "/products/list"
    VIEW_BASKET = "/basket/view"
    ADD_TO_BASKET = "/basket/add"
    REMOVE_FROM_BASKET = "/basket/remove"
    CHECKOUT = "/basket/checkout"
    APPLY_COUPON = "/coupon/apply"
    REMOVE_COUPON = "/coupon/remove"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class StoreRequest(BaseModel):
    """Base for store tool requests. Unknown fields are ignored."""


class ListProducts(StoreRequest):
    """List products in the store catalog, one page at a time. Use next_offset from the reply to fetch the following page; -1 means there are no more pages."""
    tool: Literal["/products/list"] = "/products/list"
    offset: int = Field(0, description="Pagination offset")
    limit: int = Field(20, description="Number of products per page")


class ViewBasket(StoreRequest):
    """View the current basket: items, subtotal, discount, total and the applied coupon."""
    tool: Literal["/basket/view"] = "/basket/view"


class AddToBasket(StoreRequest):
    """Add units of a product to the basket."""
    tool: Literal["/basket/add"] = "/basket/add"
    sku: str = Field(..., description="Product SKU")
    quantity: int = Field(1, description="Number of units to add")


class RemoveFromBasket(StoreRequest):
    """Remove units of a product from the basket."""
    tool: Literal["/basket/remove"] = "/basket/remove"
    sku: str = Field(..., description="Product SKU")
    quantity: int = Field(1, description="Number of units to remove")


class ApplyCoupon(StoreRequest):
    """Apply a coupon code to the basket. Replaces any coupon already applied."""
    tool: Literal["/coupon/apply"] = "/coupon/apply"
    coupon: str = Field(..., description="Coupon code")


class RemoveCoupon(StoreRequest):
    """Remove the coupon currently applied to the basket."""
    tool: Literal["/coupon/remove"] = "/coupon/remove"


class Checkout(StoreRequest):
    """Check out the basket. Returns the final order and empties the basket."""
    tool: Literal["/basket/checkout"] = "/basket/checkout"


STORE_REQUEST_MODELS: dict[StoreTool, type[StoreRequest]] = {
    StoreTool.LIST_PRODUCTS: ListProducts,
    StoreTool.VIEW_BASKET: ViewBasket,
    StoreTool.ADD_TO_BASKET: AddToBasket,
    StoreTool.REMOVE_FROM_BASKET: RemoveFromBasket,
    StoreTool.CHECKOUT: Checkout,
    StoreTool.APPLY_COUPON: ApplyCoupon,
    StoreTool.REMOVE_COUPON: RemoveCoupon,
}

STORE_TOOL_DEFINITIONS = tool_definitions(STORE_REQUEST_MODELS)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

# Dollar amounts, whole or fractional, as the server reports them.
Money = Union[int, float]


class _Response(BaseModel):
    model_config = ConfigDict(extra="allow")


class Product(_Response):
    """Catalog entry."""
    sku: str
    name: str = ""
    price: Money = 0
    available: int = 0


class ProductPage(_Response):
    """One page of the product listing."""
    products: list[Product] = Field(default_factory=list)
    next_offset: int = -1

    @property
    def is_last(self) -> bool:
        return self.next_offset == -1


class BasketItem(_Response):
    sku: str
    quantity: int
    price: Money = 0


class Basket(_Response):
    """Basket snapshot, also returned by checkout."""
    items: list[BasketItem] = Field(default_factory=list)
    subtotal: Money = 0
    discount: Money = 0
    total: Money = 0
    coupon: Optional[str] = None


class BasketCount(_Response):
    """Reply to add/remove: number of lines and units in the basket."""
    line_count: int = 0
    item_count: int = 0
