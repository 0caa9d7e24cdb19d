from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    TIMESTAMP,
    CheckConstraint,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from backoffice.db.base import Base


class Product(Base):
    __tablename__ = "products"

    product_id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    product_name = Column(
        String(255),
        nullable=False,
    )

    category = Column(
        String(100),
        nullable=False,
    )

    price = Column(
        Numeric(10, 2),
        nullable=False,
        comment="Current unit price",
    )

    stock = Column(
        Integer,
        nullable=False,
        server_default="0",
        comment="Units available for sale",
    )

    description = Column(
        Text,
        nullable=True,
    )

    created_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    order_items = relationship("OrderItem", back_populates="product")

    __table_args__ = (
        CheckConstraint(
            "stock >= 0",
            name="ck_products_stock_non_negative",
        ),
        CheckConstraint(
            "price >= 0",
            name="ck_products_price_non_negative",
        ),
    )

    def __repr__(self):
        return f"<Product(id={self.product_id}, name='{self.product_name}', stock={self.stock})>"


Index(
    "idx_products_category",
    Product.category,
)
