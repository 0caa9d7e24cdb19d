"""Customer endpoints."""

from typing import List
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from backoffice.core.dependencies import get_db
from backoffice.core.exceptions import StoreFailure
from backoffice.schemas.base import ErrorResponse
from backoffice.schemas.customer import (
    CustomerCreateRequest,
    CustomerCreateResponse,
    CustomerResponse,
    CustomerStatsResponse,
)
from backoffice.schemas.order import CustomerOrderResponse
from backoffice.services.customer_service import CustomerService
from backoffice.services.order_service import OrderService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or duplicate email"},
        404: {"model": ErrorResponse, "description": "Customer not found"},
        500: {"model": ErrorResponse, "description": "Database error"},
    },
)


@router.get("", response_model=List[CustomerResponse], summary="List customers")
def list_customers(db: Session = Depends(get_db)):
    try:
        return CustomerService(db).list_customers()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing customers failed: {str(e)}")
        raise StoreFailure(str(e))


@router.post("", response_model=CustomerCreateResponse, status_code=201, summary="Add a customer")
def add_customer(
    request: CustomerCreateRequest = Body(...),
    db: Session = Depends(get_db),
):
    try:
        customer = CustomerService(db).add_customer(
            request.name, request.email, request.phone, request.address
        )
        return {"message": "Customer added successfully", "customerId": customer.customer_id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Adding customer failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/{customer_id}", response_model=CustomerResponse, summary="Get a customer")
def get_customer(
    customer_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    try:
        return CustomerService(db).get_customer(customer_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reading customer {customer_id} failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/{customer_id}/orders", response_model=List[CustomerOrderResponse], summary="List a customer's orders")
def get_customer_orders(
    customer_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    try:
        return OrderService(db).customer_orders(customer_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing orders of customer {customer_id} failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/{customer_id}/stats", response_model=CustomerStatsResponse, summary="Order count and spend of a customer")
def get_customer_stats(
    customer_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    try:
        return CustomerService(db).stats(customer_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reading stats of customer {customer_id} failed: {str(e)}")
        raise StoreFailure(str(e))
