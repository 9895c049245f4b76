"""
storefront/repositories/firestore_store.py - Durable backend on Firestore.

Collections (prefix-aware via FIREBASE_COLLECTION_PREFIX):
- products/{id}
- orders/{id}
- admins/{username}

Brand filtering is a case-insensitive substring match, which Firestore cannot express,
so it is applied in Python after the featured/category query.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import FailedPrecondition, GoogleAPICallError
from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from google.cloud.firestore_v1.base_query import FieldFilter

from storefront.repositories.base import StoreError, StorefrontStore
from storefront.services.orders_helpers import compute_stats, sort_newest_first
from storefront.services.products_helpers import matches_filter

logger = logging.getLogger("storefront.store.firestore")


class FirestoreStore(StorefrontStore):
    durable = True

    def __init__(self, db, prefix: str = "") -> None:
        self.db = db
        self._prefix = (prefix or "").strip()

    def _col(self, name: str):
        return self.db.collection(f"{self._prefix}{name}" if self._prefix else name)

    def _stream_newest_first(self, query) -> List[Dict[str, Any]]:
        # Fast path when the index exists; otherwise sort in Python
        try:
            docs = query.order_by("createdAt", direction=firestore.Query.DESCENDING).stream()
            return [d.to_dict() or {} for d in docs]
        except FailedPrecondition:
            logger.debug("Missing index for createdAt ordering, sorting in Python")
            return sort_newest_first(d.to_dict() or {} for d in query.stream())

    # ---------- products ----------
    def list_products(self, brand=None, featured=None, category=None) -> List[Dict[str, Any]]:
        q = self._col("products")
        if featured:
            q = q.where(filter=FieldFilter("featured", "==", featured == "true"))
        if category:
            q = q.where(filter=FieldFilter("category", "==", category))
        try:
            docs = self._stream_newest_first(q)
        except GoogleAPICallError as e:
            raise StoreError(f"Error fetching products: {e}") from e
        return [d for d in docs if matches_filter(d, brand=brand)]

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self._col("products").document(data["id"]).set(data)
        except GoogleAPICallError as e:
            raise StoreError(f"Error adding product: {e}") from e
        return data

    def update_product(self, product_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ref = self._col("products").document(product_id)
        try:
            if not ref.get().exists:
                return None
            if patch:
                ref.update(patch)
            return ref.get().to_dict() or {}
        except GoogleAPICallError as e:
            raise StoreError(f"Error updating product: {e}") from e

    def delete_product(self, product_id: str) -> bool:
        ref = self._col("products").document(product_id)
        try:
            if not ref.get().exists:
                return False
            ref.delete()
        except GoogleAPICallError as e:
            raise StoreError(f"Error deleting product: {e}") from e
        return True

    def count_products(self) -> int:
        try:
            return sum(1 for _ in self._col("products").stream())
        except GoogleAPICallError as e:
            raise StoreError(f"Error counting products: {e}") from e

    def insert_products(self, docs: Iterable[Dict[str, Any]]) -> int:
        batch = self.db.batch()
        n = 0
        for d in docs:
            batch.set(self._col("products").document(d["id"]), d)
            n += 1
        if n:
            try:
                batch.commit()
            except GoogleAPICallError as e:
                raise StoreError(f"Error seeding products: {e}") from e
        return n

    # ---------- orders ----------
    def create_order(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self._col("orders").document(doc["id"]).set(doc)
        except GoogleAPICallError as e:
            raise StoreError(f"Error placing order: {e}") from e
        return doc

    def list_orders(self, limit: int = 50) -> List[Dict[str, Any]]:
        try:
            docs = (
                self._col("orders")
                    .order_by("createdAt", direction=firestore.Query.DESCENDING)
                    .limit(limit)
                    .stream()
            )
            return [d.to_dict() or {} for d in docs]
        except FailedPrecondition:
            return sort_newest_first(d.to_dict() or {} for d in self._col("orders").stream())[:limit]
        except GoogleAPICallError as e:
            raise StoreError(f"Error fetching orders: {e}") from e

    def update_order_status(self, order_id: str, status: str) -> Optional[Dict[str, Any]]:
        ref = self._col("orders").document(order_id)
        try:
            if not ref.get().exists:
                return None
            ref.update({"status": status, "updatedAt": SERVER_TIMESTAMP})
            return ref.get().to_dict() or {}
        except GoogleAPICallError as e:
            raise StoreError(f"Error updating order: {e}") from e

    def stats(self) -> Dict[str, Any]:
        try:
            orders = [d.to_dict() or {} for d in self._col("orders").stream()]
        except GoogleAPICallError as e:
            raise StoreError(f"Error fetching stats: {e}") from e
        return compute_stats(self.count_products(), orders)

    # ---------- admins ----------
    def find_admin(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        if not username:
            return None
        try:
            snap = self._col("admins").document(username).get()
        except GoogleAPICallError as e:
            raise StoreError(f"Error during login: {e}") from e
        if not snap.exists:
            return None
        admin = snap.to_dict() or {}
        return admin if admin.get("password") == password else None

    def ensure_admin(self, username: str, password: str, reset: bool = False) -> Dict[str, Any]:
        ref = self._col("admins").document(username)
        try:
            snap = ref.get()
            if snap.exists and not reset:
                return snap.to_dict() or {}
            if snap.exists:
                ref.update({"password": password})
            else:
                ref.set({
                    "username": username,
                    "password": password,
                    "role": "admin",
                    "createdAt": SERVER_TIMESTAMP,
                })
            return ref.get().to_dict() or {}
        except GoogleAPICallError as e:
            raise StoreError(f"Error saving admin: {e}") from e
