"""
storefront/client/views.py - Display state of the cart, checkout and confirmation panels.

Only state: what is open and what it shows. Whatever draws the screen reads from here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from storefront.client.cart import CartEngine, format_money
from storefront.schemas.cart import CartEntry

EMPTY_CART_TEXT = "Your cart is empty"


@dataclass
class SummaryLine:
    label: str
    amount: str


class CartView:
    def __init__(self) -> None:
        self.is_open = False
        self.badge_count = 0
        self.lines: List[CartEntry] = []
        self.total_text = "0.00"

    @property
    def empty_text(self) -> Optional[str]:
        return EMPTY_CART_TEXT if self.is_open and not self.lines else None

    def refresh(self, engine: CartEngine) -> None:
        """Cart listener: the badge always follows, the panel only while open."""
        self.badge_count = engine.get_item_count()
        if self.is_open:
            self.lines = engine.entries
            self.total_text = format_money(engine.get_total())

    def open(self, engine: CartEngine) -> None:
        self.is_open = True
        self.refresh(engine)

    def close(self) -> None:
        self.is_open = False


@dataclass
class CheckoutView:
    is_open: bool = False
    form: Dict[str, str] = field(default_factory=dict)
    summary: List[SummaryLine] = field(default_factory=list)
    total_text: str = "0.00"

    def show_summary(self, engine: CartEngine) -> None:
        self.summary = [
            SummaryLine(f"{e.name} x {e.quantity}", format_money(e.subtotal))
            for e in engine.entries
        ]
        self.total_text = format_money(engine.get_total())


@dataclass
class ConfirmationView:
    is_open: bool = False
    order_id: str = ""
    total_text: str = ""

    def show(self, order_id: str, total: str) -> None:
        self.is_open = True
        self.order_id = order_id
        self.total_text = total

    def close(self) -> None:
        self.is_open = False
