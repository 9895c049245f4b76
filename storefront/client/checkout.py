"""
storefront/client/checkout.py - Checkout: validate, submit, confirm.

IDLE -> VALIDATING -> SUBMITTING -> CONFIRMED | FAILED, and FAILED falls back to
IDLE. Validation happens locally before any request. On failure the cart and the
form are kept so the shopper can retry; resubmissions are not deduplicated.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from storefront.client.cart import CartEngine, format_money
from storefront.client.errors import ApplicationError, StorefrontError, TransportError, ValidationError
from storefront.client.notices import NoticeBoard
from storefront.client.views import CheckoutView, ConfirmationView
from storefront.schemas.order import REQUIRED_CUSTOMER_FIELDS

logger = logging.getLogger("storefront.client.checkout")

EMPTY_CART_MESSAGE = "Your cart is empty!"
ORDER_FAILED_MESSAGE = "Failed to place order"
ORDER_PLACED_MESSAGE = "Order placed successfully!"


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class OrderConfirmed:
    """Emitted once per accepted order; consumed by the notifier."""
    order_id: str
    customer: Dict[str, str]
    items: List[Dict[str, Any]] = field(default_factory=list)
    total: float = 0.0


def validate_customer(form: Mapping[str, Any]) -> Dict[str, str]:
    """Trimmed required fields, or ValidationError naming every blank one in order."""
    trimmed = {name: str(form.get(name) or "").strip() for name in REQUIRED_CUSTOMER_FIELDS}
    missing = [name for name, value in trimmed.items() if not value]
    if missing:
        raise ValidationError(
            "Please fill in all required fields: " + ", ".join(missing),
            missing_fields=missing,
        )
    return trimmed


def _json_number(value: Any) -> Any:
    """NaN and infinities go on the wire as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def wire_items(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**item, "price": _json_number(item.get("price"))} for item in items]


class CheckoutWorkflow:
    def __init__(
        self,
        engine: CartEngine,
        api,
        notices: NoticeBoard,
        notifier=None,
        checkout_view: Optional[CheckoutView] = None,
        confirmation_view: Optional[ConfirmationView] = None,
    ):
        self.engine = engine
        self.api = api
        self.notices = notices
        self.notifier = notifier
        self.checkout_view = checkout_view or CheckoutView()
        self.confirmation_view = confirmation_view or ConfirmationView()
        self.state = CheckoutState.IDLE
        self.last_error: Optional[StorefrontError] = None

    def _set_state(self, state: CheckoutState) -> None:
        logger.debug("checkout %s -> %s", self.state.value, state.value)
        self.state = state

    def open(self) -> bool:
        if self.engine.is_empty():
            self.notices.error(EMPTY_CART_MESSAGE)
            return False
        self.checkout_view.is_open = True
        self.checkout_view.show_summary(self.engine)
        return True

    def close(self) -> None:
        self.checkout_view.is_open = False

    def _fail(self, error: StorefrontError) -> None:
        self.last_error = error
        self._set_state(CheckoutState.FAILED)
        self.notices.error(error.message)
        self._set_state(CheckoutState.IDLE)

    async def submit(self, form: Mapping[str, Any]) -> Optional[OrderConfirmed]:
        """Place the order. Returns the confirmation event, or None after posting an error notice."""
        self.last_error = None
        self.checkout_view.form = {k: "" if v is None else str(v) for k, v in form.items()}
        self._set_state(CheckoutState.VALIDATING)
        try:
            if self.engine.is_empty():
                raise ValidationError(EMPTY_CART_MESSAGE)
            customer = validate_customer(form)
        except ValidationError as e:
            self._fail(e)
            return None

        items = self.engine.snapshot()
        total = self.engine.get_total()
        payload: Dict[str, Any] = {**customer, "items": wire_items(items), "total": _json_number(total)}

        self._set_state(CheckoutState.SUBMITTING)
        try:
            body = await self.api.place_order(payload)
        except TransportError as e:
            logger.error("Error placing order: %s", e)
            self._fail(TransportError(f"Error placing order: {e.message}"))
            return None
        except ApplicationError as e:
            self._fail(ApplicationError(e.message or ORDER_FAILED_MESSAGE, status_code=e.status_code))
            return None

        order = body.get("order") or {}
        event = OrderConfirmed(
            order_id=str(order.get("id", "")),
            customer=customer,
            items=items,
            total=total,
        )

        self.engine.clear()
        self.checkout_view.is_open = False
        self.checkout_view.form = {}
        self.confirmation_view.show(event.order_id, format_money(total))
        self._set_state(CheckoutState.CONFIRMED)
        self.notices.success(ORDER_PLACED_MESSAGE)
        logger.info("Order %s confirmed", event.order_id)

        if self.notifier is not None:
            try:
                self.notifier.notify(event)
            except Exception:
                logger.exception("Order notification could not be scheduled")
        return event
