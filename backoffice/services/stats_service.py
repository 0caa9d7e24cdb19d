"""Dashboard counters."""

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.models.customer import Customer
from backoffice.models.order import Order
from backoffice.models.product import Product


class StatsService:

    def __init__(self, db: Session, low_stock_threshold: int = None):
        self.db = db
        self.low_stock_threshold = (
            settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
        )

    def _scalar(self, stmt):
        return self.db.execute(stmt).scalar_one()

    def dashboard(self) -> dict:
        return {
            "totalRevenue": self._scalar(select(func.coalesce(func.sum(Order.total_amount), 0))),
            "totalOrders": self._scalar(select(func.count(Order.order_id))),
            "totalCustomers": self._scalar(select(func.count(Customer.customer_id))),
            "totalProducts": self._scalar(select(func.count(Product.product_id))),
            "lowStock": self._scalar(
                select(func.count(Product.product_id)).where(Product.stock < self.low_stock_threshold)
            ),
        }
