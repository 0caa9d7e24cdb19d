"""Product and category read endpoints."""

from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from backoffice.core.dependencies import get_db
from backoffice.core.exceptions import StoreFailure
from backoffice.schemas.base import ErrorResponse
from backoffice.schemas.product import ProductResponse
from backoffice.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Products"],
    responses={
        404: {"model": ErrorResponse, "description": "Product not found"},
        500: {"model": ErrorResponse, "description": "Database error"},
    },
)


@router.get("/products", response_model=List[ProductResponse], summary="List products in stock")
def list_products(db: Session = Depends(get_db)):
    try:
        return CatalogService(db).list_in_stock()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing products failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/products/category/{category}", response_model=List[ProductResponse], summary="List products of a category")
def list_products_by_category(
    category: str = Path(..., min_length=1, description="Category name"),
    db: Session = Depends(get_db),
):
    try:
        return CatalogService(db).list_by_category(category)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing category {category} failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get a product")
def get_product(
    product_id: int = Path(..., gt=0, description="Product ID"),
    db: Session = Depends(get_db),
):
    try:
        return CatalogService(db).get_product(product_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reading product {product_id} failed: {str(e)}")
        raise StoreFailure(str(e))


@router.get("/categories", response_model=List[str], summary="List categories")
def list_categories(db: Session = Depends(get_db)):
    try:
        return CatalogService(db).list_categories()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Listing categories failed: {str(e)}")
        raise StoreFailure(str(e))
