"""Store API client: product catalog, basket, coupons and checkout.

The store benchmark simulates an e-commerce platform. Every endpoint lives
under ``/store/<task_id>`` and each request body repeats its own path in a
``tool`` field, which the server expects.

Usage:
    store = client.get_store_client(task)
    for product in store.iter_products(limit=3):
        ...
    store.add_to_basket("gpu-h100", 2)
    store.apply_coupon("SAVE20")
    order = store.checkout()
"""

from __future__ import annotations

from typing import Iterator, Optional

from erc3.models import to_task_id
from erc3.store.models import STORE_REQUEST_MODELS, StoreTool
from erc3.tools import resolve_tool, validate_request
from erc3.transport import RequestExecutor


class StoreClient:
    """Client for the store benchmark API of one task."""

    def __init__(self, base_url: str, task, *, session=None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.task_id = to_task_id(task)
        self._executor = RequestExecutor(
            f"{self.base_url}/store/{self.task_id}",
            session=session,
            timeout=timeout,
        )
        self._handlers = {
            StoreTool.LIST_PRODUCTS: lambda r: self.list_products(r.offset, r.limit),
            StoreTool.VIEW_BASKET: lambda r: self.view_basket(),
            StoreTool.ADD_TO_BASKET: lambda r: self.add_to_basket(r.sku, r.quantity),
            StoreTool.REMOVE_FROM_BASKET: lambda r: self.remove_from_basket(r.sku, r.quantity),
            StoreTool.CHECKOUT: lambda r: self.checkout(),
            StoreTool.APPLY_COUPON: lambda r: self.apply_coupon(r.coupon),
            StoreTool.REMOVE_COUPON: lambda r: self.remove_coupon(),
        }

    def _call(self, tool: StoreTool, **fields) -> dict:
        return self._executor.execute(tool.value, {"tool": tool.value, **fields})

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(self, offset: int = 0, limit: int = 20) -> dict:
        """List one page of products.

        Returns ``{"products": [...], "next_offset": N}``; ``next_offset``
        is -1 on the last page.
        """
        return self._call(StoreTool.LIST_PRODUCTS, offset=offset, limit=limit)

    def iter_products(self, offset: int = 0, limit: int = 20) -> Iterator[dict]:
        """Yield products page by page until ``next_offset`` is -1."""
        while True:
            page = self.list_products(offset=offset, limit=limit)
            yield from page.get("products") or []
            next_offset = page.get("next_offset", -1)
            if next_offset == -1:
                return
            offset = next_offset

    def list_all_products(self, limit: int = 20) -> list[dict]:
        """Fetch the whole catalog."""
        return list(self.iter_products(limit=limit))

    # ------------------------------------------------------------------
    # Basket
    # ------------------------------------------------------------------

    def view_basket(self) -> dict:
        """Current basket with items, subtotal, discount, total and coupon."""
        return self._call(StoreTool.VIEW_BASKET)

    def add_to_basket(self, sku: str, quantity: int = 1) -> dict:
        """Add units of a product. Returns ``{line_count, item_count}``."""
        return self._call(StoreTool.ADD_TO_BASKET, sku=sku, quantity=quantity)

    def remove_from_basket(self, sku: str, quantity: int = 1) -> dict:
        """Remove units of a product. Returns ``{line_count, item_count}``."""
        return self._call(StoreTool.REMOVE_FROM_BASKET, sku=sku, quantity=quantity)

    def checkout(self) -> dict:
        """Complete the purchase. The server empties the basket."""
        return self._call(StoreTool.CHECKOUT)

    # ------------------------------------------------------------------
    # Coupons
    # ------------------------------------------------------------------

    def apply_coupon(self, coupon: str) -> dict:
        """Apply a coupon, replacing the current one if any."""
        return self._call(StoreTool.APPLY_COUPON, coupon=coupon)

    def remove_coupon(self) -> dict:
        return self._call(StoreTool.REMOVE_COUPON)

    # ------------------------------------------------------------------
    # Tool dispatch
    # ------------------------------------------------------------------

    def dispatch(self, request) -> dict:
        """Route a request to the method named by its ``tool`` field.

        ``request`` is a mapping such as ``{"tool": "/basket/add", "sku": "x"}``
        or one of the request models in ``erc3.store.models``.

        Raises:
            UnknownToolError: the tool is not a store tool.
            pydantic.ValidationError: a required field is missing or invalid.
        """
        tool, fields = resolve_tool(request, StoreTool)
        parsed = validate_request(STORE_REQUEST_MODELS[tool], fields)
        return self._handlers[tool](parsed)

    def __repr__(self) -> str:
        return f"StoreClient(base_url={self.base_url!r}, task_id={self.task_id!r})"
