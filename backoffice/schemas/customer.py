from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from backoffice.schemas.base import ORMSchema


class CustomerCreateRequest(BaseModel):
    """Request body for adding a customer."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Asha Verma"])
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$", examples=["asha@example.com"])
    phone: Optional[str] = Field(None, max_length=20, examples=["9876543210"])
    address: Optional[str] = Field(None, examples=["12 MG Road, Bengaluru"])


class CustomerCreateResponse(BaseModel):
    message: str
    customerId: int


class CustomerResponse(ORMSchema):
    customer_id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class CustomerStatsResponse(BaseModel):
    total_orders: int
    total_spent: float
