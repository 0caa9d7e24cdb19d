"""Model tests."""
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from backoffice.models import Customer, Order, OrderItem, OrderStatus, Product


class TestModels:

    def test_product_defaults(self, db_session):
        product = Product(product_name="Notebook", category="Stationery", price=Decimal("45.50"))
        db_session.add(product)
        db_session.commit()

        db_session.expire_all()
        saved = db_session.get(Product, product.product_id)
        assert saved.stock == 0
        assert saved.price == Decimal("45.50")
        assert saved.created_at is not None

    def test_stock_cannot_go_negative(self, db_session, seeded):
        seeded["p1"].stock = -1

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_customer_email_unique(self, db_session, seeded):
        db_session.add(Customer(name="Copy", email="asha@example.com"))

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_order_defaults(self, db_session, seeded):
        order = Order(customer_id=7)
        db_session.add(order)
        db_session.commit()

        db_session.expire_all()
        saved = db_session.get(Order, order.order_id)
        assert saved.status == OrderStatus.PENDING
        assert saved.total_amount == 0
        assert saved.order_date is not None
        assert saved.customer.name == "Asha Verma"

    def test_item_quantity_must_be_positive(self, db_session, seeded):
        order = Order(customer_id=7)
        db_session.add(order)
        db_session.flush()
        db_session.add(OrderItem(order_id=order.order_id, product_id=1, quantity=0, subtotal=0))

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_deleting_order_deletes_items(self, db_session, seeded):
        order = Order(customer_id=7, total_amount=Decimal("350.00"))
        order.items = [
            OrderItem(product_id=1, quantity=1, subtotal=Decimal("100.00")),
            OrderItem(product_id=2, quantity=1, subtotal=Decimal("250.00")),
        ]
        db_session.add(order)
        db_session.commit()

        db_session.delete(order)
        db_session.commit()

        assert db_session.execute(select(func.count()).select_from(OrderItem)).scalar_one() == 0
        assert db_session.get(Product, 1) is not None

    def test_status_stored_as_lowercase_value(self, db_session, seeded):
        order = Order(customer_id=7, status=OrderStatus.DELIVERED)
        db_session.add(order)
        db_session.commit()

        raw = db_session.connection().exec_driver_sql(
            "SELECT status FROM orders WHERE order_id = ?", (order.order_id,)
        ).scalar_one()
        assert raw == "delivered"
