"""Request and response models for the order endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from backoffice.models.order import OrderStatus


# ==================== Requests ====================

class OrderItemRequest(BaseModel):
    """One line of a multi-item order."""
    product_id: int = Field(..., gt=0, description="Product ID", examples=[1])
    quantity: int = Field(..., gt=0, description="Units requested", examples=[3])


class MultiOrderRequest(BaseModel):
    customer_id: int = Field(..., gt=0, description="Customer ID", examples=[7])
    items: List[OrderItemRequest] = Field(
        ...,
        min_length=1,
        description="Line items, processed in order",
    )


class SingleOrderRequest(BaseModel):
    customer_id: int = Field(..., gt=0, examples=[7])
    product_id: int = Field(..., gt=0, examples=[1])
    quantity: int = Field(..., gt=0, examples=[3])


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus = Field(..., description="New lifecycle status", examples=["shipped"])


# ==================== Responses ====================

class OrderCreatedResponse(BaseModel):
    message: str
    orderId: int


class OrderSummaryResponse(BaseModel):
    order_id: int
    customer_id: int
    customer_name: str
    order_date: Optional[datetime] = None
    total_amount: float
    status: OrderStatus


class CustomerOrderResponse(BaseModel):
    order_id: int
    order_date: Optional[datetime] = None
    total_amount: float
    status: OrderStatus
    item_count: int


class OrderItemDetail(BaseModel):
    item_id: int
    product_id: int
    product_name: str
    price: float
    quantity: int
    subtotal: float


class OrderDetailResponse(OrderSummaryResponse):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    items: List[OrderItemDetail] = []
