"""Tests for StoreClient: pagination, basket, coupons, checkout and dispatch."""

import pytest
from pydantic import ValidationError

from erc3 import ApiError, StoreClient, UnknownToolError
from erc3.store import AddToBasket, Basket, ListProducts, ProductPage, StoreTool, ViewBasket

from conftest import BASE_URL, StubSession
from fake_server import CATALOG


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

class TestWireFormat:
    @pytest.mark.parametrize("call, tool, extra", [
        (lambda s: s.list_products(), "/products/list", {"offset": 0, "limit": 20}),
        (lambda s: s.view_basket(), "/basket/view", {}),
        (lambda s: s.add_to_basket("ram-64g"), "/basket/add", {"sku": "ram-64g", "quantity": 1}),
        (lambda s: s.remove_from_basket("ram-64g", 3), "/basket/remove", {"sku": "ram-64g", "quantity": 3}),
        (lambda s: s.apply_coupon("SAVE10"), "/coupon/apply", {"coupon": "SAVE10"}),
        (lambda s: s.remove_coupon(), "/coupon/remove", {}),
        (lambda s: s.checkout(), "/basket/checkout", {}),
    ])
    def test_tool_field_matches_path(self, call, tool, extra):
        session = StubSession(payload={})
        store = StoreClient("https://api.example", "tsk-7", session=session)

        call(store)

        sent = session.calls[0]
        assert sent["url"] == f"https://api.example/store/tsk-7{tool}"
        assert sent["json"] == {"tool": tool, **extra}

    def test_task_object_accepted(self):
        store = StoreClient(BASE_URL, {"task_id": "tsk-3"})
        assert store.task_id == "tsk-3"


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class TestProducts:
    def test_first_page(self, store):
        page = ProductPage.model_validate(store.list_products(offset=0, limit=3))
        assert [p.sku for p in page.products] == [p["sku"] for p in CATALOG[:3]]
        assert page.next_offset == 3
        assert not page.is_last

    def test_pagination_terminates_at_minus_one(self, store, transport):
        offset, seen, calls = 0, [], 0
        while True:
            page = store.list_products(offset=offset, limit=3)
            calls += 1
            seen.extend(p["sku"] for p in page["products"])
            if page["next_offset"] == -1:
                break
            offset = page["next_offset"]

        assert seen == [p["sku"] for p in CATALOG]
        assert calls == 3

    def test_iter_products(self, store, transport):
        before = len(transport.requests)
        products = list(store.iter_products(limit=2))
        assert [p["sku"] for p in products] == [p["sku"] for p in CATALOG]
        assert len(transport.requests) - before == 4

    def test_iter_products_is_lazy(self, store, transport):
        before = len(transport.requests)
        first = next(store.iter_products(limit=2))
        assert first["sku"] == CATALOG[0]["sku"]
        assert len(transport.requests) - before == 1

    def test_list_all_products(self, store):
        assert len(store.list_all_products(limit=5)) == len(CATALOG)

    def test_wrong_benchmark_task(self, client, demo_task):
        store = client.get_store_client(demo_task)
        with pytest.raises(ApiError) as exc_info:
            store.list_products()
        assert exc_info.value.code == "WRONG_BENCHMARK"


# ---------------------------------------------------------------------------
# Basket
# ---------------------------------------------------------------------------

class TestBasket:
    def test_add_returns_counts(self, store):
        assert store.add_to_basket("ram-64g", 2) == {"line_count": 1, "item_count": 2}
        assert store.add_to_basket("ssd-4t") == {"line_count": 2, "item_count": 3}

    def test_add_then_remove_restores_counts(self, store):
        before = store.add_to_basket("ram-64g", 1)

        store.add_to_basket("psu-2k", 2)
        after = store.remove_from_basket("psu-2k", 2)

        assert after == before

    def test_view_basket(self, store):
        store.add_to_basket("ram-64g", 2)
        basket = Basket.model_validate(store.view_basket())
        assert [(i.sku, i.quantity, i.price) for i in basket.items] == [("ram-64g", 2, 300)]
        assert basket.subtotal == 600
        assert basket.discount == 0
        assert basket.total == 600
        assert basket.coupon is None

    def test_fractional_amounts(self):
        basket = Basket.model_validate({
            "items": [{"sku": "cable-usb", "quantity": 1, "price": 12.99}],
            "subtotal": 12.99, "discount": 0, "total": 12.99,
        })
        assert basket.items[0].price == 12.99
        assert basket.total == 12.99
        assert isinstance(basket.discount, int)

    def test_unknown_sku(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.add_to_basket("nope")
        assert exc_info.value.status == 404
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    def test_insufficient_stock(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.add_to_basket("case-4u", 10)
        assert exc_info.value.code == "INSUFFICIENT_STOCK"

    def test_remove_missing_item(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.remove_from_basket("ram-64g")
        assert exc_info.value.code == "ITEM_NOT_IN_BASKET"


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------

class TestCoupons:
    def test_apply_returns_empty(self, store):
        store.add_to_basket("ram-64g", 10)
        assert store.apply_coupon("SAVE10") == {}

    def test_second_coupon_replaces_first(self, store):
        store.add_to_basket("ram-64g", 10)
        store.apply_coupon("SAVE10")
        store.apply_coupon("SAVE20")

        basket = store.view_basket()
        assert basket["coupon"] == "SAVE20"
        assert basket["discount"] == 600
        assert basket["total"] == basket["subtotal"] - basket["discount"]

    def test_remove_coupon(self, store):
        store.add_to_basket("ram-64g", 10)
        store.apply_coupon("SAVE20")
        assert store.remove_coupon() == {}
        basket = store.view_basket()
        assert basket["coupon"] is None
        assert basket["discount"] == 0

    def test_invalid_coupon(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.apply_coupon("FREE100")
        assert exc_info.value.code == "INVALID_COUPON"
        assert exc_info.value.message == "Coupon 'FREE100' is not valid"


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------

class TestCheckout:
    def test_checkout_totals_and_empties_basket(self, store):
        store.add_to_basket("gpu-a100", 1)
        store.add_to_basket("ram-64g", 4)
        store.apply_coupon("SAVE10")

        order = store.checkout()

        assert order["total"] == order["subtotal"] - order["discount"]
        assert order["coupon"] == "SAVE10"
        assert len(order["items"]) == 2
        assert store.view_basket()["items"] == []

    def test_checkout_empty_basket(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.checkout()
        assert exc_info.value.code == "EMPTY_BASKET"

    def test_checkout_completes_task(self, client):
        session = client.start_session(benchmark="store", workspace="w", name="n")
        task = client.session_status(session["session_id"])["tasks"][0]
        client.start_task(task)
        store = client.get_store_client(task)
        store.add_to_basket("ram-64g")
        store.checkout()
        assert client.complete_task(task)["eval"]["success"] is True


# ---------------------------------------------------------------------------
# Tool dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_dispatch_matches_direct_calls(self, store, transport):
        store.dispatch({"tool": "/basket/add", "sku": "ram-64g", "quantity": 2})
        via_dispatch = transport.last["json"]
        store.add_to_basket("ram-64g", 2)
        assert transport.last["json"] == via_dispatch

    def test_dispatch_list_products_defaults(self, store, transport):
        result = store.dispatch({"tool": "/products/list"})
        assert transport.last["json"] == {"tool": "/products/list", "offset": 0, "limit": 20}
        assert result["next_offset"] == -1

    def test_dispatch_none_fields_use_defaults(self, store, transport):
        store.dispatch({"tool": "/products/list", "offset": None, "limit": 2})
        assert transport.last["json"] == {"tool": "/products/list", "offset": 0, "limit": 2}

    def test_dispatch_every_tool(self, store):
        results = [
            store.dispatch({"tool": "/basket/add", "sku": "ram-64g", "quantity": 3}),
            store.dispatch({"tool": "/basket/remove", "sku": "ram-64g"}),
            store.dispatch({"tool": "/coupon/apply", "coupon": "SAVE10"}),
            store.dispatch({"tool": "/coupon/remove"}),
            store.dispatch({"tool": "/basket/view"}),
            store.dispatch({"tool": "/basket/checkout"}),
        ]
        assert results[0]["item_count"] == 3
        assert results[1]["item_count"] == 2
        assert results[2] == {} and results[3] == {}
        assert results[4]["total"] == 600
        assert results[5]["total"] == 600

    def test_dispatch_request_models(self, store, transport):
        store.dispatch(AddToBasket(sku="ssd-4t"))
        assert transport.last["json"] == {"tool": "/basket/add", "sku": "ssd-4t", "quantity": 1}
        store.dispatch(ListProducts(offset=3, limit=3))
        assert transport.last["json"]["offset"] == 3
        assert store.dispatch(ViewBasket())["items"][0]["sku"] == "ssd-4t"

    def test_dispatch_enum_tool(self, store, transport):
        store.dispatch({"tool": StoreTool.VIEW_BASKET})
        assert transport.last["json"] == {"tool": "/basket/view"}

    def test_unknown_tool(self, store, transport):
        before = len(transport.requests)
        with pytest.raises(UnknownToolError) as exc_info:
            store.dispatch({"tool": "/basket/destroy"})
        assert exc_info.value.tool == "/basket/destroy"
        assert "/basket/add" in exc_info.value.known
        assert not isinstance(exc_info.value, ApiError)
        assert len(transport.requests) == before

    def test_missing_tool(self, store):
        with pytest.raises(UnknownToolError):
            store.dispatch({"sku": "ram-64g"})

    def test_demo_tool_rejected(self, store):
        with pytest.raises(UnknownToolError):
            store.dispatch({"tool": "/secret"})

    def test_missing_required_field(self, store, transport):
        before = len(transport.requests)
        with pytest.raises(ValidationError):
            store.dispatch({"tool": "/coupon/apply"})
        assert len(transport.requests) == before

    def test_api_errors_propagate(self, store):
        with pytest.raises(ApiError):
            store.dispatch({"tool": "/basket/checkout"})
