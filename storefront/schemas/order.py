# storefront/schemas/order.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, Envelope

# Order statuses; any of them may be set by an admin at any time
OrderStatus = Literal["pending", "confirmed", "shipped", "delivered", "cancelled"]

REQUIRED_CUSTOMER_FIELDS = ("customerName", "email", "phone", "address", "city", "pincode")


# Cart line snapshot stored on the order
class OrderItem(CamelModel):
    product_id: str
    name: str
    brand: str = ""
    price: float
    quantity: int = Field(1, ge=1)
    image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None


class CustomerInfo(CamelModel):
    customer_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)


# (Input) order submission payload
class OrderCreate(CustomerInfo):
    items: List[OrderItem] = Field(..., min_length=1)
    total: Optional[float] = Field(None, ge=0, description="Client-computed total; recomputed when absent")


# (Output)
class OrderOut(CustomerInfo):
    id: str
    items: List[OrderItem] = Field(default_factory=list)
    total: float
    status: OrderStatus = "pending"
    payment_method: str = "cod"
    created_at: Optional[datetime] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderResponse(Envelope):
    order: OrderOut


class OrderListResponse(Envelope):
    orders: List[OrderOut] = Field(default_factory=list)


class StatsOut(CamelModel):
    total_products: int = 0
    total_orders: int = 0
    pending_orders: int = 0
    total_revenue: float = 0.0


class StatsResponse(Envelope):
    stats: StatsOut
