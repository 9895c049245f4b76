# storefront/services/orders_helpers.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from storefront.schemas.order import OrderCreate, OrderOut

__all__ = [
    "new_order_id",
    "calc_total",
    "build_order_doc",
    "order_doc_to_out",
    "compute_stats",
    "sort_newest_first",
]


def new_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:8].upper()}"


def calc_total(items: Iterable[Any]) -> float:
    """
    Sum of price x quantity. Accepts OrderItem models or camelCase dicts.
    """
    total = Decimal("0")
    for it in items:
        d = it if isinstance(it, dict) else it.model_dump()
        qty = int(d.get("quantity", 1) or 1)
        price = Decimal(str(d.get("price", 0) or 0))
        total += price * qty
    return float(total)


def build_order_doc(payload: OrderCreate, order_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Stored order document (camelCase, as it goes on the wire).
    The client-computed total is kept as submitted; it is only derived here when missing.
    """
    items = [it.model_dump(by_alias=True, exclude_none=True) for it in payload.items]
    total = payload.total if payload.total is not None else calc_total(payload.items)
    return {
        "id": order_id or new_order_id(),
        "customerName": payload.customer_name,
        "email": payload.email,
        "phone": payload.phone,
        "address": payload.address,
        "city": payload.city,
        "pincode": payload.pincode,
        "items": items,
        "total": total,
        "status": "pending",
        "paymentMethod": "cod",
        "createdAt": datetime.now(timezone.utc),
    }


def _to_dt(ts: Any) -> Optional[datetime]:
    if ts is None:
        return None
    if isinstance(ts, datetime):
        return ts
    # Firestore Timestamp
    if hasattr(ts, "to_datetime"):
        return ts.to_datetime()
    if isinstance(ts, str):
        try:
            return datetime.fromisoformat(ts.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def order_doc_to_out(doc: Dict[str, Any]) -> OrderOut:
    d = dict(doc or {})
    d["createdAt"] = _to_dt(d.get("createdAt"))
    # older documents stored the amount as totalAmount / the id as orderId
    if "total" not in d and "totalAmount" in d:
        d["total"] = d["totalAmount"]
    if "id" not in d and "orderId" in d:
        d["id"] = d["orderId"]
    return OrderOut.model_validate(d)


def sort_newest_first(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    epoch = datetime.min.replace(tzinfo=timezone.utc)

    def _key(d: Dict[str, Any]) -> datetime:
        dt = _to_dt(d.get("createdAt")) or epoch
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

    return sorted(docs, key=_key, reverse=True)


def compute_stats(total_products: int, orders: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    totalRevenue excludes cancelled orders; pendingOrders counts status == pending.
    """
    total_orders = 0
    pending = 0
    revenue = Decimal("0")
    for o in orders:
        total_orders += 1
        status = (o.get("status") or "pending").strip()
        if status == "pending":
            pending += 1
        if status != "cancelled":
            revenue += Decimal(str(o.get("total", o.get("totalAmount", 0)) or 0))
    return {
        "totalProducts": total_products,
        "totalOrders": total_orders,
        "pendingOrders": pending,
        "totalRevenue": float(revenue),
    }
