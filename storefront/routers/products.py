"""
# `storefront/routers/products.py`: Product endpoints

## Public
### `GET /api/products?brand&featured&category`
1. `brand` → case-insensitive substring match.
2. `featured` → `"true"` keeps featured products, any other value keeps the rest.
3. `category` → exact match.
4. Newest first. Response: `{success, products}`.

## Admin (prefix `/api/admin`)
### `POST /products`
Creates a product. In demo mode the product comes back with a `demo<millis>` id and a
`(Demo Mode)` message, and is not added to the listing.

### `PUT /products/{product_id}`
Updates only the provided fields; `404` when the id is unknown.

### `DELETE /products/{product_id}`
Removes the product; `404` when the id is unknown.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.core.security import get_store
from storefront.repositories.base import StorefrontStore
from storefront.schemas.common import Envelope
from storefront.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from storefront.services.products_helpers import build_product_doc, product_doc_to_out, update_patch

logger = logging.getLogger("storefront.products")

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductListResponse, summary="List Products")
def list_products(
    brand: Optional[str] = Query(None, description="Brand (case-insensitive, partial)"),
    featured: Optional[str] = Query(None, description="'true' for featured products"),
    category: Optional[str] = Query(None, description="Exact category"),
    store: StorefrontStore = Depends(get_store),
):
    docs = store.list_products(brand=brand, featured=featured, category=category)
    return ProductListResponse(products=[product_doc_to_out(d) for d in docs])


# Admin sub-router for product management
admin_router = APIRouter(prefix="/products", tags=["Admin Products"])


@admin_router.post("", response_model=ProductResponse, summary="Create Product")
def create_product(payload: ProductCreate, store: StorefrontStore = Depends(get_store)):
    doc = store.create_product(build_product_doc(payload))
    logger.info("Product created: %s (%s)", doc.get("name"), doc.get("id"))
    return ProductResponse(
        message=f"Product added successfully{store.message_suffix}",
        product=product_doc_to_out(doc),
    )


@admin_router.put("/{product_id}", response_model=ProductResponse, summary="Update Product")
def update_product(product_id: str, payload: ProductUpdate, store: StorefrontStore = Depends(get_store)):
    doc = store.update_product(product_id, update_patch(payload))
    if doc is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse(
        message=f"Product updated successfully{store.message_suffix}",
        product=product_doc_to_out(doc),
    )


@admin_router.delete("/{product_id}", response_model=Envelope, summary="Delete Product")
def delete_product(product_id: str, store: StorefrontStore = Depends(get_store)):
    logger.debug("Attempting to delete product with ID: %s", product_id)
    if not store.delete_product(product_id):
        logger.info("Product not found with ID: %s", product_id)
        raise HTTPException(status_code=404, detail="Product not found")
    return Envelope(message=f"Product deleted successfully{store.message_suffix}")
