"""Product and category reads."""

from typing import List
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice.core.exceptions import NotFoundError
from backoffice.models.product import Product

logger = logging.getLogger(__name__)


class CatalogService:

    def __init__(self, db: Session):
        self.db = db

    def list_in_stock(self) -> List[Product]:
        """Products that can still be ordered, newest first."""
        return self.db.execute(
            select(Product)
            .where(Product.stock > 0)
            .order_by(Product.created_at.desc(), Product.product_id.desc())
        ).scalars().all()

    def get_product(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def list_by_category(self, category: str) -> List[Product]:
        return self.db.execute(
            select(Product)
            .where(Product.category == category, Product.stock > 0)
            .order_by(Product.product_id)
        ).scalars().all()

    def list_categories(self) -> List[str]:
        return self.db.execute(
            select(Product.category).distinct().order_by(Product.category)
        ).scalars().all()
