"""Plain-text renderers. Each takes the data it shows as arguments."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from backoffice.client.cart import Cart

CURRENCY = "₹"


def format_money(value) -> str:
    return f"{CURRENCY}{Decimal(str(value or 0)):,.2f}"


def format_date(value) -> str:
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(str(value)).strftime("%Y-%m-%d")
    except ValueError:
        return str(value)


def render_stats(stats: Dict) -> str:
    return "\n".join([
        f"Revenue:    {format_money(stats.get('totalRevenue'))}",
        f"Orders:     {stats.get('totalOrders', 0)}",
        f"Customers:  {stats.get('totalCustomers', 0)}",
        f"Products:   {stats.get('totalProducts', 0)}",
        f"Low stock:  {stats.get('lowStock', 0)}",
    ])


def render_products(products: List[Dict]) -> str:
    if not products:
        return "No products found"

    rows = []
    for product in products:
        rows.append(
            f"#{product['product_id']:<5} {product['product_name']:<30} "
            f"{product['category']:<15} {format_money(product['price']):>12}  stock {product['stock']}"
        )
    return "\n".join(rows)


def render_customers(customers: List[Dict], stats: Dict[int, Dict] = None) -> str:
    if not customers:
        return "No customers found"

    stats = stats or {}
    blocks = []
    for customer in customers:
        lines = [
            f"#{customer['customer_id']} {customer['name']}",
            f"  email:   {customer.get('email') or '-'}",
            f"  phone:   {customer.get('phone') or '-'}",
            f"  address: {customer.get('address') or '-'}",
        ]
        customer_stats = stats.get(customer["customer_id"])
        if customer_stats:
            lines.append(
                f"  orders:  {customer_stats['total_orders']}  "
                f"spent: {format_money(customer_stats['total_spent'])}"
            )
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_orders(orders: List[Dict]) -> str:
    if not orders:
        return "No orders found"

    return "\n".join(
        f"Order #{order['order_id']:<6} {order.get('customer_name', ''):<25} "
        f"{format_date(order.get('order_date'))}  {order['status'].upper():<10} "
        f"{format_money(order['total_amount']):>12}"
        for order in orders
    )


def render_order_detail(order: Dict) -> str:
    lines = [
        f"Order #{order['order_id']} ({order['status'].upper()})",
        f"Customer: {order['customer_name']} <{order.get('email') or '-'}>",
        f"Date:     {format_date(order.get('order_date'))}",
        "",
    ]
    for item in order.get("items", []):
        lines.append(
            f"  {item['product_name']:<30} x {item['quantity']:<4} {format_money(item['subtotal']):>12}"
        )
    lines.append("")
    lines.append(f"Total: {format_money(order['total_amount'])}")
    return "\n".join(lines)


def render_cart(cart: Cart) -> str:
    if cart.is_empty():
        return "Your cart is empty"

    lines = [
        f"{line.product_name:<30} {format_money(line.price)} x {line.quantity:<4} "
        f"{format_money(line.line_total):>12}  (#{line.product_id})"
        for line in cart.lines
    ]
    lines.append("")
    lines.append(f"Items: {cart.count}   Total: {format_money(cart.total)}")
    return "\n".join(lines)
