"""Order endpoints: placement, status changes and order queries."""

from typing import List
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from backoffice.core.dependencies import get_db, get_redlock
from backoffice.core.exceptions import StoreFailure
from backoffice.schemas.base import ErrorResponse, MessageResponse
from backoffice.schemas.order import (
    MultiOrderRequest,
    OrderCreatedResponse,
    OrderDetailResponse,
    OrderItemRequest,
    OrderStatusUpdateRequest,
    OrderSummaryResponse,
    SingleOrderRequest,
)
from backoffice.services.order_service import OrderService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, unknown product or insufficient stock"},
        404: {"model": ErrorResponse, "description": "Order not found"},
        429: {"model": ErrorResponse, "description": "Stock lock conflict"},
        500: {"model": ErrorResponse, "description": "Database error"},
    },
)


@router.post(
    "/multi",
    response_model=OrderCreatedResponse,
    status_code=201,
    summary="Place an order with several items",
    description="""Places an order for one customer and any number of lines.

    - Stock is checked and decremented under row locks in one transaction
    - The order total is the sum of the line subtotals
    - Any failing line rejects the whole order; nothing is persisted
    """,
    responses={
        201: {
            "description": "Order placed",
            "content": {
                "application/json": {
                    "example": {"message": "Order placed successfully", "orderId": 42}
                }
            },
        },
        400: {
            "description": "Rejected order",
            "content": {
                "application/json": {
                    "example": {"error": "Insufficient stock for product 1: requested 5, available 2"}
                }
            },
        },
    },
)
def place_multi_order(
    request: MultiOrderRequest = Body(...),
    db: Session = Depends(get_db),
    rlock=Depends(get_redlock),
):
    try:
        service = OrderService(db, rlock)
        order = service.place_order(request.customer_id, request.items)
        return {"message": "Order placed successfully", "orderId": order.order_id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Placing order failed: {str(e)}")
        raise StoreFailure(str(e))


@router.post("", response_model=OrderCreatedResponse, status_code=201, summary="Place a single-item order")
def place_order(
    request: SingleOrderRequest = Body(...),
    db: Session = Depends(get_db),
    rlock=Depends(get_redlock),
):
    try:
        service = OrderService(db, rlock)
        order = service.place_order(
            request.customer_id,
            [OrderItemRequest(product_id=request.product_id, quantity=request.quantity)],
        )
        return {"message": "Order placed successfully", "orderId": order.order_id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Placing order failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("", response_model=List[OrderSummaryResponse], summary="List orders")
def list_orders(db: Session = Depends(get_db)):
    try:
        return OrderService(db).list_orders()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing orders failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/{order_id}", response_model=OrderDetailResponse, summary="Get an order with its items")
def get_order(
    order_id: int = Path(..., gt=0, description="Order ID"),
    db: Session = Depends(get_db),
):
    try:
        return OrderService(db).get_order(order_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reading order {order_id} failed: {str(e)}")
        raise StoreFailure(str(e))


@router.patch("/{order_id}/status", response_model=MessageResponse, summary="Update order status")
def update_order_status(
    order_id: int = Path(..., gt=0, description="Order ID"),
    request: OrderStatusUpdateRequest = Body(...),
    db: Session = Depends(get_db),
):
    try:
        OrderService(db).update_status(order_id, request.status)
        return {"message": "Order status updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Updating status of order {order_id} failed: {str(e)}")
        raise StoreFailure(str(e))
