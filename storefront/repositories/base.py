"""
storefront/repositories/base.py - Storage capability shared by the durable (Firestore)
and the ephemeral (in-memory, demo mode) backends.

Documents are plain camelCase dicts, the same shape the routes put on the wire.
Routes never branch on the backend; the only observable difference is `durable`
(demo writes answer with a " (Demo Mode)" suffix and products created in demo mode
are not added to the listing).
"""
from __future__ import annotations

import abc
from typing import Any, Dict, Iterable, List, Optional


class StoreError(Exception):
    """Raised when the underlying storage fails."""


class StorefrontStore(abc.ABC):
    durable: bool = True

    @property
    def message_suffix(self) -> str:
        return "" if self.durable else " (Demo Mode)"

    # ---------- products ----------
    @abc.abstractmethod
    def list_products(
        self,
        brand: Optional[str] = None,
        featured: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Newest first."""

    @abc.abstractmethod
    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abc.abstractmethod
    def update_product(self, product_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """None when the product does not exist."""

    @abc.abstractmethod
    def delete_product(self, product_id: str) -> bool:
        """False when the product does not exist."""

    @abc.abstractmethod
    def count_products(self) -> int:
        ...

    @abc.abstractmethod
    def insert_products(self, docs: Iterable[Dict[str, Any]]) -> int:
        """Bulk insert used for seeding; returns the number written."""

    # ---------- orders ----------
    @abc.abstractmethod
    def create_order(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abc.abstractmethod
    def list_orders(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Newest first, capped at `limit`."""

    @abc.abstractmethod
    def update_order_status(self, order_id: str, status: str) -> Optional[Dict[str, Any]]:
        """None when the order does not exist. No transition order is enforced."""

    @abc.abstractmethod
    def stats(self) -> Dict[str, Any]:
        ...

    # ---------- admins ----------
    @abc.abstractmethod
    def find_admin(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Plaintext comparison."""

    @abc.abstractmethod
    def ensure_admin(self, username: str, password: str, reset: bool = False) -> Dict[str, Any]:
        """Create the admin if missing; with reset=True overwrite its password."""
