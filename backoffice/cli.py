"""Terminal client for the back office API."""

import argparse
import logging
import sys

from backoffice.client.api import ApiError, BackofficeClient
from backoffice.client.cart import Cart, JsonFileCartStorage
from backoffice.client.render import (
    render_cart,
    render_customers,
    render_order_detail,
    render_orders,
    render_products,
    render_stats,
)
from backoffice.core.config import settings
from backoffice.models.order import OrderStatus

logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ORDER_STATUSES = [status.value for status in OrderStatus]


def cmd_stats(args, client, cart):
    print(render_stats(client.stats()))


def cmd_categories(args, client, cart):
    categories = client.list_categories()
    print("\n".join(categories) if categories else "No categories found")


def cmd_products(args, client, cart):
    print(render_products(client.list_products(args.category)))


def cmd_product(args, client, cart):
    print(render_products([client.get_product(args.product_id)]))


def cmd_customers(args, client, cart):
    customers = client.list_customers()
    stats = {c["customer_id"]: client.customer_stats(c["customer_id"]) for c in customers}
    print(render_customers(customers, stats))


def cmd_add_customer(args, client, cart):
    customer_id = client.add_customer(args.name, args.email, args.phone, args.address)
    print(f"Customer added successfully (id {customer_id})")


def cmd_orders(args, client, cart):
    if args.customer:
        orders = client.customer_orders(args.customer)
    else:
        orders = client.list_orders()
    print(render_orders(orders))


def cmd_order(args, client, cart):
    print(render_order_detail(client.get_order(args.order_id)))


def cmd_set_status(args, client, cart):
    print(client.update_order_status(args.order_id, args.status))


def cmd_cart(args, client, cart):
    if args.action == "add":
        product = client.get_product(args.product_id)
        cart.add(product["product_id"], product["product_name"], product["price"], args.quantity)
        print(f"{product['product_name']} added to cart")
    elif args.action == "remove":
        if not cart.remove(args.product_id):
            print(f"Product {args.product_id} is not in the cart")
            return
    elif args.action == "update":
        cart.update_quantity(args.product_id, args.change)
    elif args.action == "clear":
        cart.clear()
    print(render_cart(cart))


def cmd_checkout(args, client, cart):
    if cart.is_empty():
        print("Your cart is empty!")
        return 1

    print(render_cart(cart))
    order_id = client.place_order(args.customer, cart.to_order_items())
    cart.clear()
    order = client.get_order(order_id)
    print(f"\nOrder #{order_id} placed successfully")
    print(render_order_detail(order))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shop back office terminal client")
    parser.add_argument("--api-url", default=settings.API_BASE_URL, help="API base URL (default: %(default)s)")
    parser.add_argument("--cart-file", default=settings.CART_FILE, help="Cart file (default: %(default)s)")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("stats", help="Dashboard counters").set_defaults(func=cmd_stats)
    sub.add_parser("categories", help="List categories").set_defaults(func=cmd_categories)

    p = sub.add_parser("products", help="List products in stock")
    p.add_argument("--category", help="Only this category")
    p.set_defaults(func=cmd_products)

    p = sub.add_parser("product", help="Show one product")
    p.add_argument("product_id", type=int)
    p.set_defaults(func=cmd_product)

    sub.add_parser("customers", help="List customers with their stats").set_defaults(func=cmd_customers)

    p = sub.add_parser("add-customer", help="Add a customer")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--phone")
    p.add_argument("--address")
    p.set_defaults(func=cmd_add_customer)

    p = sub.add_parser("orders", help="List orders")
    p.add_argument("--customer", type=int, help="Only orders of this customer")
    p.set_defaults(func=cmd_orders)

    p = sub.add_parser("order", help="Show an order with its items")
    p.add_argument("order_id", type=int)
    p.set_defaults(func=cmd_order)

    p = sub.add_parser("set-status", help="Change an order's status")
    p.add_argument("order_id", type=int)
    p.add_argument("status", choices=ORDER_STATUSES)
    p.set_defaults(func=cmd_set_status)

    p = sub.add_parser("cart", help="Manage the local cart")
    cart_sub = p.add_subparsers(dest="action", required=True)
    cart_sub.add_parser("show")
    add = cart_sub.add_parser("add")
    add.add_argument("product_id", type=int)
    add.add_argument("--quantity", type=int, default=1)
    remove = cart_sub.add_parser("remove")
    remove.add_argument("product_id", type=int)
    update = cart_sub.add_parser("update")
    update.add_argument("product_id", type=int)
    update.add_argument("change", type=int, help="e.g. 1 or -1")
    cart_sub.add_parser("clear")
    p.set_defaults(func=cmd_cart)

    p = sub.add_parser("checkout", help="Place an order from the cart")
    p.add_argument("--customer", type=int, required=True, help="Customer ID")
    p.set_defaults(func=cmd_checkout)

    return parser


def main(argv=None, client: BackofficeClient = None, cart: Cart = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if client is None:
        client = BackofficeClient(args.api_url)
    if cart is None:
        cart = Cart(JsonFileCartStorage(args.cart_file))

    try:
        return args.func(args, client, cart) or 0
    except ApiError as e:
        logger.debug(f"API error: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
