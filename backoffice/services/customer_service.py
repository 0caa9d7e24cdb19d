"""Customer management and per-customer aggregates."""

from decimal import Decimal
from typing import List
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backoffice.core.exceptions import BusinessRuleViolation, NotFoundError, StoreFailure
from backoffice.models.customer import Customer
from backoffice.models.order import Order

logger = logging.getLogger(__name__)


class CustomerService:

    def __init__(self, db: Session):
        self.db = db

    def list_customers(self) -> List[Customer]:
        return self.db.execute(
            select(Customer).order_by(Customer.created_at.desc(), Customer.customer_id.desc())
        ).scalars().all()

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def add_customer(self, name: str, email: str, phone: str = None, address: str = None) -> Customer:
        """Insert a customer; the email address must be unused."""
        customer = Customer(name=name, email=email, phone=phone, address=address)
        try:
            self.db.add(customer)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Customer rejected, duplicate email: {email}")
            raise BusinessRuleViolation(f"Customer with email {email} already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Adding customer failed: {str(e)}")
            raise StoreFailure(str(e)) from e

        logger.info(f"Customer added: customer_id={customer.customer_id}")
        return customer

    def total_orders(self, customer_id: int) -> int:
        return self.db.execute(
            select(func.count(Order.order_id)).where(Order.customer_id == customer_id)
        ).scalar_one()

    def total_spent(self, customer_id: int) -> Decimal:
        return self.db.execute(
            select(func.coalesce(func.sum(Order.total_amount), 0)).where(Order.customer_id == customer_id)
        ).scalar_one()

    def stats(self, customer_id: int) -> dict:
        return {
            "total_orders": self.total_orders(customer_id),
            "total_spent": self.total_spent(customer_id),
        }
