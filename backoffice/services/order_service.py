"""Order placement and order queries."""

from decimal import Decimal
from typing import List, Optional, Sequence
import logging

from fastapi import HTTPException
from redlock import Redlock
from sqlalchemy import select, update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import (
    BusinessRuleViolation,
    NotFoundError,
    OrderValidationError,
    StockLockConflict,
    StoreFailure,
)
from backoffice.models.customer import Customer
from backoffice.models.order import Order, OrderStatus
from backoffice.models.order_item import OrderItem
from backoffice.models.product import Product

logger = logging.getLogger(__name__)


class OrderService:
    """Places orders atomically and answers order queries."""

    def __init__(self, db: Session, rlock: Redlock = None):
        self.db = db
        self.rlock = rlock

    def place_order(self, customer_id: int, items: Sequence) -> Order:
        """Create an order with one item per requested line.

        ``items`` is a sequence of objects carrying ``product_id`` and
        ``quantity``. Either every line is committed together with the stock
        decrements and the final total, or nothing is.
        """
        self._validate_request(customer_id, items)

        product_ids = sorted({item.product_id for item in items})
        locks = self._acquire_locks(product_ids)

        try:
            customer = self.db.get(Customer, customer_id)
            if customer is None:
                raise BusinessRuleViolation(f"Customer {customer_id} not found")

            order = Order(
                customer_id=customer_id,
                total_amount=Decimal("0"),
                status=OrderStatus.PENDING,
            )
            self.db.add(order)
            self.db.flush()

            # Row locks taken in id order so concurrent orders cannot deadlock
            products = {
                product.product_id: product
                for product in self.db.execute(
                    select(Product)
                    .where(Product.product_id.in_(product_ids))
                    .order_by(Product.product_id)
                    .with_for_update()
                    .execution_options(populate_existing=True)
                ).scalars()
            }

            total = Decimal("0")
            for item in items:
                total += self._add_line(order, products.get(item.product_id), item.product_id, item.quantity)

            order.total_amount = total
            self.db.commit()
            logger.info(
                f"Order placed: order_id={order.order_id}, customer_id={customer_id}, "
                f"lines={len(items)}, total={total}"
            )
            return order

        except HTTPException as e:
            self.db.rollback()
            logger.warning(f"Order rejected for customer {customer_id}: {e.detail}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order placement failed for customer {customer_id}: {str(e)}")
            raise StoreFailure(str(e)) from e
        finally:
            self._release_locks(locks)

    def _validate_request(self, customer_id: int, items: Sequence):
        if not customer_id or not items:
            raise OrderValidationError("Missing required fields")
        for item in items:
            if not item.product_id:
                raise OrderValidationError("Missing required fields")
            if item.quantity is None or item.quantity <= 0:
                raise OrderValidationError(
                    f"Quantity must be positive for product {item.product_id}"
                )

    def _add_line(self, order: Order, product: Optional[Product], product_id: int, quantity: int) -> Decimal:
        if product is None:
            raise BusinessRuleViolation(f"Product {product_id} not found")

        if product.stock < quantity:
            raise BusinessRuleViolation(
                f"Insufficient stock for product {product_id}: "
                f"requested {quantity}, available {product.stock}"
            )

        subtotal = Decimal(product.price) * quantity
        self.db.add(
            OrderItem(
                order_id=order.order_id,
                product_id=product_id,
                quantity=quantity,
                subtotal=subtotal,
            )
        )

        # Conditional decrement: a concurrent writer that got there first leaves 0 rows matched
        result = self.db.execute(
            update(Product)
            .where(Product.product_id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise BusinessRuleViolation(
                f"Insufficient stock for product {product_id}: requested {quantity}"
            )
        # reload on next access so a repeated line sees the decremented stock
        self.db.expire(product, ["stock"])

        logger.debug(f"Line added: order_id={order.order_id}, product_id={product_id}, quantity={quantity}")
        return subtotal

    def _acquire_locks(self, product_ids: List[int]) -> list:
        if not self.rlock:
            return []

        locks = []
        for product_id in product_ids:
            lock = self.rlock.lock(f"lock:product:{product_id}", settings.LOCK_TTL_MS)
            if not lock:
                self._release_locks(locks)
                logger.warning(f"Could not lock product {product_id}")
                raise StockLockConflict()
            locks.append(lock)
        return locks

    def _release_locks(self, locks: list):
        for lock in locks:
            self.rlock.unlock(lock)

    def update_status(self, order_id: int, status: OrderStatus) -> None:
        """Move an order to a new lifecycle status."""
        try:
            result = self.db.execute(
                update(Order)
                .where(Order.order_id == order_id)
                .values(status=status)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Order not found")
            self.db.commit()
            logger.info(f"Order {order_id} status set to {OrderStatus(status).value}")
        except HTTPException:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Status update failed for order {order_id}: {str(e)}")
            raise StoreFailure(str(e)) from e

    def list_orders(self) -> List[dict]:
        rows = self.db.execute(
            select(
                Order.order_id,
                Order.customer_id,
                Customer.name.label("customer_name"),
                Order.order_date,
                Order.total_amount,
                Order.status,
            )
            .join(Customer, Order.customer_id == Customer.customer_id)
            .order_by(Order.order_date.desc(), Order.order_id.desc())
        ).mappings().all()
        return [dict(row) for row in rows]

    def get_order(self, order_id: int) -> dict:
        """Order header with customer contact details and its line items."""
        header = self.db.execute(
            select(
                Order.order_id,
                Order.customer_id,
                Customer.name.label("customer_name"),
                Customer.email,
                Customer.phone,
                Customer.address,
                Order.order_date,
                Order.total_amount,
                Order.status,
            )
            .join(Customer, Order.customer_id == Customer.customer_id)
            .where(Order.order_id == order_id)
        ).mappings().one_or_none()

        if header is None:
            raise NotFoundError("Order not found")

        items = self.db.execute(
            select(
                OrderItem.item_id,
                OrderItem.product_id,
                Product.product_name,
                Product.price,
                OrderItem.quantity,
                OrderItem.subtotal,
            )
            .join(Product, OrderItem.product_id == Product.product_id)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.item_id)
        ).mappings().all()

        return {**header, "items": [dict(item) for item in items]}

    def customer_orders(self, customer_id: int) -> List[dict]:
        """A customer's orders, newest first, with the number of lines in each."""
        rows = self.db.execute(
            select(
                Order.order_id,
                Order.order_date,
                Order.total_amount,
                Order.status,
                func.count(OrderItem.item_id).label("item_count"),
            )
            .outerjoin(OrderItem, OrderItem.order_id == Order.order_id)
            .where(Order.customer_id == customer_id)
            .group_by(Order.order_id, Order.order_date, Order.total_amount, Order.status)
            .order_by(Order.order_date.desc(), Order.order_id.desc())
        ).mappings().all()
        return [dict(row) for row in rows]
