# Models
from .product import Product
from .customer import Customer
from .order import Order, OrderStatus
from .order_item import OrderItem

__all__ = [
    "Product",
    "Customer",
    "Order",
    "OrderStatus",
    "OrderItem",
]
