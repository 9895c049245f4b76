from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from storefront.core.security import get_store
from storefront.repositories.base import StorefrontStore
from storefront.schemas.order import (
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from storefront.services.orders_helpers import build_order_doc, order_doc_to_out

logger = logging.getLogger("storefront.orders")

router = APIRouter(prefix="/api/orders", tags=["Orders"])
admin_router = APIRouter(prefix="/orders", tags=["Admin Orders"])


@router.post("", response_model=OrderResponse)
def create_order(payload: OrderCreate, store: StorefrontStore = Depends(get_store)):
    """
    Stores the order as submitted: customer fields, a snapshot of the cart lines and the total.
    Every call creates a new order; resubmissions are not deduplicated.
    """
    doc = store.create_order(build_order_doc(payload))
    logger.info("Order %s placed by %s (total=%s)", doc["id"], doc["customerName"], doc["total"])
    return OrderResponse(
        message=f"Order placed successfully{store.message_suffix}",
        order=order_doc_to_out(doc),
    )


@admin_router.get("", response_model=OrderListResponse)
def admin_list_orders(request: Request, store: StorefrontStore = Depends(get_store)):
    """Most recent orders, newest first."""
    limit = request.app.state.settings.orders_list_limit
    return OrderListResponse(orders=[order_doc_to_out(d) for d in store.list_orders(limit=limit)])


@admin_router.put("/{order_id}", response_model=OrderResponse)
def admin_update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    store: StorefrontStore = Depends(get_store),
):
    """Any status may be set at any time; there is no enforced transition order."""
    doc = store.update_order_status(order_id, body.status)
    if doc is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderResponse(
        message=f"Order status updated successfully{store.message_suffix}",
        order=order_doc_to_out(doc),
    )
