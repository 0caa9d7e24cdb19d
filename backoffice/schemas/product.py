from datetime import datetime
from typing import Optional

from backoffice.schemas.base import ORMSchema


class ProductResponse(ORMSchema):
    product_id: int
    product_name: str
    category: str
    price: float
    stock: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
