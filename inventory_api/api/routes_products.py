import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventory_api.api.responses import fail, ok
from inventory_api.config import settings
from inventory_api.db import get_db
from inventory_api.schemas.product_schema import ProductRecord
from inventory_api.services.product_service import (
    ProductException,
    ProductNotFound,
    ProductService,
)

log = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def _internal_error(action: str, e: Exception):
    log.exception("Failed to %s", action)
    return fail(f"Failed to {action}: {e}", 500)


@router.get("", summary="List products, newest first")
def list_products(svc: ProductService = Depends(get_product_service)):
    try:
        return ok("Products retrieved successfully", svc.list_products())
    except Exception as e:
        return _internal_error("retrieve products", e)


# static paths are registered before /{product_id}


@router.get("/search", summary="Search products by name or description")
def search_products(
    q: Optional[str] = Query(None, description="search term"),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return ok("Search completed successfully", svc.search_products(q))
    except Exception as e:
        return _internal_error("search products", e)


@router.get("/low-stock", summary="Products at or below a quantity threshold")
def low_stock_products(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return ok(
            "Low stock products retrieved successfully",
            svc.get_low_stock_products(threshold),
        )
    except Exception as e:
        return _internal_error("retrieve low stock products", e)


@router.get("/category/{category}", summary="Products whose category contains a string")
def products_by_category(category: str, svc: ProductService = Depends(get_product_service)):
    try:
        return ok("Products retrieved successfully", svc.get_products_by_category(category))
    except Exception as e:
        return _internal_error("retrieve products by category", e)


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        p = svc.get_product(product_id)
    except Exception as e:
        return _internal_error("retrieve product", e)
    if p is None:
        return fail(f"Product not found with id: {product_id}", 404)
    return ok("Product retrieved successfully", p)


@router.post("", summary="Create product", status_code=201)
def create_product(payload: ProductRecord, svc: ProductService = Depends(get_product_service)):
    try:
        created = svc.create_product(payload)
        return ok("Product created successfully", created, status_code=201)
    except ProductException as e:
        return fail(str(e), 400)
    except Exception as e:
        return _internal_error("create product", e)


@router.put("/{product_id}", summary="Replace a product")
def update_product(
    product_id: int,
    payload: ProductRecord,
    svc: ProductService = Depends(get_product_service),
):
    # not-found and duplicate-name both surface as 400 here
    try:
        return ok("Product updated successfully", svc.update_product(product_id, payload))
    except ProductException as e:
        return fail(str(e), 400)
    except Exception as e:
        return _internal_error("update product", e)


@router.delete("/{product_id}", summary="Delete product")
def delete_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        svc.delete_product(product_id)
        return ok("Product deleted successfully")
    except ProductNotFound as e:
        return fail(str(e), 404)
    except Exception as e:
        return _internal_error("delete product", e)
