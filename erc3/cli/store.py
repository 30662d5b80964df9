"""erc3-store: command-line interface for the ERC3 store API.

Usage: erc3-store <command> <task-id> [options]

Examples:
    erc3-store products task-123 --limit 3
    erc3-store add task-123 --sku gpu-h100 --quantity 1
    erc3-store coupon:apply task-123 --coupon SAVE20
    erc3-store checkout task-123

Notes:
    - Prices are shown in dollars as returned by the server
    - Only one coupon can be applied at a time
    - The task must come from a 'store' benchmark session
"""

from __future__ import annotations

import argparse
from typing import Optional

from erc3.cli.common import (
    ENV_HELP,
    add_common_args,
    build_client,
    configure_logging,
    print_json,
    run_command,
)
from erc3.store.models import Basket, ProductPage


def _money(value) -> str:
    return f"${float(value or 0):.2f}"


def format_basket(basket: Basket, title: str = "Shopping Basket") -> str:
    lines = [
        "",
        f"=== {title} ===",
        f"Items: {len(basket.items)}",
        f"Subtotal: {_money(basket.subtotal)}",
        f"Discount: {_money(basket.discount)}",
        f"Total: {_money(basket.total)}",
    ]
    if basket.coupon:
        lines.append(f"Coupon: {basket.coupon}")
    if basket.items:
        lines.append("")
        lines.append("Items:")
        for i, item in enumerate(basket.items, 1):
            lines.append(f"  {i}. {item.sku}: {item.quantity} x {_money(item.price)}")
    lines.append("")
    return "\n".join(lines)


def format_products(page: ProductPage) -> str:
    lines = [
        "",
        "=== Products ===",
        f"Showing {len(page.products)} products",
        f"Next offset: {page.next_offset}",
        "",
    ]
    for i, product in enumerate(page.products, 1):
        lines.append(f"{i}. {product.name} ({product.sku})")
        lines.append(f"   Price: {_money(product.price)}")
        lines.append(f"   Available: {product.available}")
        lines.append("")
    return "\n".join(lines)


def _store(args):
    return build_client(args).get_store_client(args.task_id)


def cmd_products(args):
    result = _store(args).list_products(offset=args.offset, limit=args.limit)
    if args.json:
        print_json(result)
    else:
        print(format_products(ProductPage.model_validate(result)))


def cmd_basket(args):
    result = _store(args).view_basket()
    if args.json:
        print_json(result)
    else:
        print(format_basket(Basket.model_validate(result)))


def cmd_add(args):
    result = _store(args).add_to_basket(args.sku, args.quantity)
    print(f"Added {args.quantity}x {args.sku} to basket")
    print(f"  Line count: {result.get('line_count')}")
    print(f"  Item count: {result.get('item_count')}")


def cmd_remove(args):
    result = _store(args).remove_from_basket(args.sku, args.quantity)
    print(f"Removed {args.quantity}x {args.sku} from basket")
    print(f"  Line count: {result.get('line_count')}")
    print(f"  Item count: {result.get('item_count')}")


def cmd_coupon_apply(args):
    store = _store(args)
    store.apply_coupon(args.coupon)
    print(f"Coupon '{args.coupon}' applied successfully")
    print(format_basket(Basket.model_validate(store.view_basket())))


def cmd_coupon_remove(args):
    store = _store(args)
    store.remove_coupon()
    print("Coupon removed")
    print(format_basket(Basket.model_validate(store.view_basket())))


def cmd_checkout(args):
    result = _store(args).checkout()
    if args.json:
        print_json(result)
        return
    print("Checkout completed!")
    print(format_basket(Basket.model_validate(result), title="Order Summary"))


COMMANDS = {
    "products": cmd_products,
    "basket": cmd_basket,
    "add": cmd_add,
    "remove": cmd_remove,
    "coupon:apply": cmd_coupon_apply,
    "coupon:remove": cmd_coupon_remove,
    "checkout": cmd_checkout,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erc3-store",
        description="Command-line interface for the ERC3 store API",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_common_args(parser)
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("products", help="List products with pagination")
    p.add_argument("task_id")
    p.add_argument("--offset", type=int, default=0, help="Pagination offset (default: 0)")
    p.add_argument("--limit", type=int, default=20, help="Page size (default: 20)")
    p.add_argument("--json", action="store_true", help="Output raw JSON")

    p = sub.add_parser("basket", help="View shopping basket")
    p.add_argument("task_id")
    p.add_argument("--json", action="store_true", help="Output raw JSON")

    for name, verb in (("add", "Add product to"), ("remove", "Remove product from")):
        p = sub.add_parser(name, help=f"{verb} basket")
        p.add_argument("task_id")
        p.add_argument("--sku", required=True, help="Product SKU")
        p.add_argument("--quantity", type=int, default=1, help="Quantity (default: 1)")

    p = sub.add_parser("coupon:apply", help="Apply coupon code")
    p.add_argument("task_id")
    p.add_argument("--coupon", required=True, help="Coupon code")

    p = sub.add_parser("coupon:remove", help="Remove applied coupon")
    p.add_argument("task_id")

    p = sub.add_parser("checkout", help="Checkout basket")
    p.add_argument("task_id")
    p.add_argument("--json", action="store_true", help="Output raw JSON")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args)
    return run_command(COMMANDS[args.command], args)


if __name__ == "__main__":
    raise SystemExit(main())
