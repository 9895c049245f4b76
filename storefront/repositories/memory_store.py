"""
storefront/repositories/memory_store.py - Ephemeral backend used in demo/offline mode.

Everything lives in process memory and is lost on restart. Product creation is
simulated: the product comes back with a `demo<millis>` id but is not added to the
listing, the storefront keeps it in its own session-only demo catalog.
"""
from __future__ import annotations

import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from storefront.repositories.base import StorefrontStore
from storefront.services.orders_helpers import compute_stats, sort_newest_first
from storefront.services.products_helpers import demo_product_id, matches_filter

logger = logging.getLogger("storefront.store.memory")


class MemoryStore(StorefrontStore):
    durable = False

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._products: List[Dict[str, Any]] = []
        self._orders: List[Dict[str, Any]] = []
        self._admins: Dict[str, Dict[str, Any]] = {}

    # ---------- products ----------
    def list_products(self, brand=None, featured=None, category=None) -> List[Dict[str, Any]]:
        with self._lock:
            hits = [copy.deepcopy(p) for p in self._products if matches_filter(p, brand, featured, category)]
        return sort_newest_first(hits)

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        product = dict(data)
        product["id"] = demo_product_id()
        product.setdefault("createdAt", datetime.now(timezone.utc))
        logger.debug("Demo product %s not persisted", product["id"])
        return product

    def update_product(self, product_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            for p in self._products:
                if p.get("id") == product_id:
                    p.update(patch)
                    return copy.deepcopy(p)
        return None

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            before = len(self._products)
            self._products = [p for p in self._products if p.get("id") != product_id]
            return len(self._products) != before

    def count_products(self) -> int:
        with self._lock:
            return len(self._products)

    def insert_products(self, docs: Iterable[Dict[str, Any]]) -> int:
        docs = [copy.deepcopy(d) for d in docs]
        with self._lock:
            self._products.extend(docs)
        return len(docs)

    # ---------- orders ----------
    def create_order(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self._orders.append(copy.deepcopy(doc))
        return doc

    def list_orders(self, limit: int = 50) -> List[Dict[str, Any]]:
        with self._lock:
            orders = [copy.deepcopy(o) for o in self._orders]
        return sort_newest_first(orders)[:limit]

    def update_order_status(self, order_id: str, status: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            for o in self._orders:
                if o.get("id") == order_id:
                    o["status"] = status
                    o["updatedAt"] = datetime.now(timezone.utc)
                    return copy.deepcopy(o)
        return None

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            orders = list(self._orders)
            total_products = len(self._products)
        return compute_stats(total_products, orders)

    # ---------- admins ----------
    def find_admin(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        admin = self._admins.get(username)
        if admin and admin.get("password") == password:
            return dict(admin)
        return None

    def ensure_admin(self, username: str, password: str, reset: bool = False) -> Dict[str, Any]:
        with self._lock:
            admin = self._admins.get(username)
            if admin is None:
                admin = {
                    "username": username,
                    "password": password,
                    "role": "admin",
                    "createdAt": datetime.now(timezone.utc),
                }
                self._admins[username] = admin
            elif reset:
                admin["password"] = password
            return dict(admin)
