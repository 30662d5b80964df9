#!/usr/bin/env python3
"""Walk through the ERC3 store API for one task.

Lists the whole catalog, fills a basket with the first products, tries a
few coupons, checks out and completes the task.

Usage:
    ERC3_API_KEY=... python scripts/run_store.py --workspace my-ws
    python scripts/run_store.py --coupons SAVE10,SAVE20 --page-size 5
"""

import argparse
import logging
import sys

from erc3 import ERC3, ApiError, load_config
from erc3.cli.store import format_basket
from erc3.store import Basket

logger = logging.getLogger("erc3.scripts.store")


def try_coupons(store, coupons):
    """Apply each coupon in turn and report the discount it gives."""
    for coupon in coupons:
        try:
            store.apply_coupon(coupon)
        except ApiError as e:
            print(f"Coupon {coupon} rejected: {e.message}")
            continue
        basket = store.view_basket()
        print(f"Coupon {coupon} applied: discount {basket['discount']}, total {basket['total']}")
        store.remove_coupon()


def main():
    parser = argparse.ArgumentParser(description="Exercise the ERC3 store API")
    parser.add_argument("--config", default=None,
                        help="YAML file with api_key, base_url and timeout")
    parser.add_argument("--workspace", default="store-example", help="Workspace name")
    parser.add_argument("--name", default="Store API Example", help="Session name")
    parser.add_argument("--page-size", type=int, default=20,
                        help="Products per page when listing the catalog")
    parser.add_argument("--coupons", default="SAVE10,SAVE20",
                        help="Comma-separated coupon codes to try")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    client = ERC3.from_config(load_config(args.config))

    try:
        session = client.start_session(benchmark="store", workspace=args.workspace,
                                       name=args.name)
        task = client.session_status(session["session_id"])["tasks"][0]
        client.start_task(task)
        store = client.get_store_client(task)

        products = store.list_all_products(limit=args.page_size)
        logger.info(f"Catalog has {len(products)} products")
        if not products:
            print("Catalog is empty, nothing to buy", file=sys.stderr)
            sys.exit(1)

        cheapest = min(products, key=lambda p: p.get("price", 0))
        print(f"Cheapest product: {cheapest.get('name')} ({cheapest['sku']})")

        for product in products[:2]:
            store.add_to_basket(product["sku"], 1)
        print(format_basket(Basket.model_validate(store.view_basket())))

        try_coupons(store, [c for c in args.coupons.split(",") if c])

        order = store.checkout()
        print(format_basket(Basket.model_validate(order), title="Order Summary"))

        result = client.complete_task(task)
        print(f"Success: {(result.get('eval') or {}).get('success')}")
    except ApiError as e:
        print(f"API Error: {e.message}", file=sys.stderr)
        print(f"Status: {e.status}", file=sys.stderr)
        print(f"Code: {e.code}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
