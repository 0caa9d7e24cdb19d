import enum

from sqlalchemy import (
    Column,
    Integer,
    Numeric,
    TIMESTAMP,
    Enum,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from backoffice.db.base import Base


# 1. Order lifecycle

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# 2. Order header

class Order(Base):
    __tablename__ = "orders"

    order_id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    customer_id = Column(
        Integer,
        ForeignKey("customers.customer_id"),
        nullable=False,
        index=True,
    )

    order_date = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Sum of the item subtotals, written in the placing transaction
    total_amount = Column(
        Numeric(10, 2),
        nullable=False,
        server_default="0",
    )

    status = Column(
        Enum(
            OrderStatus,
            name="order_status_type",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        server_default=OrderStatus.PENDING.value,
    )

    customer = relationship("Customer", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.item_id",
    )

    def __repr__(self):
        return f"<Order(id={self.order_id}, customer_id={self.customer_id}, total={self.total_amount})>"


# 3. Index for the newest-first listings

Index(
    "idx_orders_order_date",
    Order.order_date.desc(),
)
