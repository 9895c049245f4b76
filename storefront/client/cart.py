"""
storefront/client/cart.py - Cart state transitions.

The module-level functions are pure: they take the current list of entries and
return a new one, never mutating their input. `CartEngine` owns the live list,
writes it whole to the `CartStore` after every mutation and tells its listeners
(badge counter, open cart view) to refresh.

Invariants kept by every transition:
- at most one entry per product id
- every entry has quantity >= 1 (dropping to 0 or below removes the entry)
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable, List, Optional

from storefront.client.cart_store import CartStore
from storefront.schemas.cart import CartEntry

logger = logging.getLogger("storefront.client.cart")

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_price(value: Any) -> float:
    """
    Lenient float coercion: numbers pass through, strings keep their leading numeric
    part ("12.5abc" -> 12.5). Anything else becomes NaN and is stored as such.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if m:
            return float(m.group(0))
    return math.nan


def add_item(
    entries: List[CartEntry],
    product_id: str,
    name: str,
    price: Any,
    image: str = "",
    brand: str = "",
) -> List[CartEntry]:
    out = [e.model_copy() for e in entries]
    for e in out:
        if e.product_id == product_id:
            e.quantity += 1
            return out
    out.append(CartEntry(
        product_id=product_id,
        name=name,
        price=parse_price(price),
        image=image or "",
        brand=brand or "",
        quantity=1,
    ))
    return out


def remove_item(entries: List[CartEntry], product_id: str) -> List[CartEntry]:
    return [e.model_copy() for e in entries if e.product_id != product_id]


def adjust_quantity(entries: List[CartEntry], product_id: str, delta: int) -> List[CartEntry]:
    out = [e.model_copy() for e in entries]
    for e in out:
        if e.product_id == product_id:
            e.quantity += int(delta)
            if e.quantity <= 0:
                return remove_item(out, product_id)
            return out
    return out


def cart_total(entries: List[CartEntry]) -> float:
    return sum((e.price * e.quantity for e in entries), 0.0)


def item_count(entries: List[CartEntry]) -> int:
    return sum(e.quantity for e in entries)


def format_money(amount: float) -> str:
    return f"{amount:.2f}"


CartListener = Callable[["CartEngine"], None]


class CartEngine:
    def __init__(self, store: CartStore, entries: Optional[List[CartEntry]] = None):
        self.store = store
        self._entries: List[CartEntry] = store.load() if entries is None else list(entries)
        self._listeners: List[CartListener] = []

    @property
    def entries(self) -> List[CartEntry]:
        """A copy; mutate through the engine."""
        return [e.model_copy() for e in self._entries]

    def is_empty(self) -> bool:
        return not self._entries

    def subscribe(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def _commit(self, entries: List[CartEntry]) -> None:
        self._entries = entries
        self.store.save(self._entries)
        for listener in self._listeners:
            listener(self)

    def add_item(self, product_id: str, name: str, price: Any, image: str = "", brand: str = "") -> None:
        logger.debug("Adding to cart: %s", product_id)
        self._commit(add_item(self._entries, product_id, name, price, image, brand))

    def remove_item(self, product_id: str) -> None:
        self._commit(remove_item(self._entries, product_id))

    def adjust_quantity(self, product_id: str, delta: int) -> None:
        if not any(e.product_id == product_id for e in self._entries):
            return
        self._commit(adjust_quantity(self._entries, product_id, delta))

    def clear(self) -> None:
        self._commit([])

    def get_total(self) -> float:
        return cart_total(self._entries)

    def get_item_count(self) -> int:
        return item_count(self._entries)

    def snapshot(self) -> List[dict]:
        """Wire form of the current entries, for order submission."""
        return [e.model_dump(by_alias=True) for e in self._entries]
