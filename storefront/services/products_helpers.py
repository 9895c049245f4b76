# storefront/services/products_helpers.py
from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from storefront.schemas.product import ProductCreate, ProductOut, ProductUpdate


def new_product_id() -> str:
    return uuid.uuid4().hex


def demo_product_id() -> str:
    """Demo ids carry a prefix and a millisecond timestamp so they never collide with stored ids."""
    return f"demo{int(time.time() * 1000)}"


def build_product_doc(payload: ProductCreate, product_id: Optional[str] = None) -> Dict[str, Any]:
    data = payload.model_dump(by_alias=True)
    data.update(
        id=product_id or new_product_id(),
        createdAt=datetime.now(timezone.utc),
    )
    return data


def update_patch(payload: ProductUpdate) -> Dict[str, Any]:
    """Only the fields the admin actually sent."""
    return payload.model_dump(by_alias=True, exclude_unset=True)


def matches_filter(
    doc: Dict[str, Any],
    brand: Optional[str] = None,
    featured: Optional[str] = None,
    category: Optional[str] = None,
) -> bool:
    """
    - brand: case-insensitive substring match
    - featured: "true" selects featured products, any other non-empty value the rest
    - category: exact match
    """
    if brand and brand.lower() not in str(doc.get("brand", "")).lower():
        return False
    if featured and bool(doc.get("featured", False)) != (featured == "true"):
        return False
    if category and doc.get("category") != category:
        return False
    return True


def product_doc_to_out(doc: Dict[str, Any]) -> ProductOut:
    d = dict(doc or {})
    ts = d.get("createdAt")
    if ts is not None and hasattr(ts, "to_datetime"):
        d["createdAt"] = ts.to_datetime()
    return ProductOut.model_validate(d)
