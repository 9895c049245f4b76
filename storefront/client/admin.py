"""
storefront/client/admin.py - Admin panel: login gate and the three dashboard tabs.

The login gate only decides what the panel shows; the backend admin routes do not
check it. Every tab refetches on activation and every failure ends as a notice with
the panel left usable.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from storefront.client.catalog import Catalog, merge_catalog
from storefront.client.errors import ApplicationError, StorefrontError, TransportError
from storefront.client.notices import NoticeBoard

logger = logging.getLogger("storefront.client.admin")

SECTIONS = ("dashboard", "products", "orders")

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def parse_int(value: Any) -> Optional[int]:
    """Leading integer of a form value ("1999.50" -> 1999); None when there is none."""
    if value is None:
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(0)) if m else None


def build_product_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    original = form.get("originalPrice")
    return {
        "name": form.get("name"),
        "brand": form.get("brand"),
        "price": parse_int(form.get("price")),
        "originalPrice": parse_int(original) if original else None,
        "image": form.get("image"),
        "category": form.get("category") or "shoes",
        "badge": form.get("badge") or "",
        "featured": form.get("featured") == "on",
    }


class AdminSession:
    def __init__(self, api, notices: NoticeBoard, dashboard: Optional["AdminDashboard"] = None):
        self.api = api
        self.notices = notices
        self.dashboard = dashboard
        self.is_logged_in = False
        self.current_admin: Optional[Dict[str, Any]] = None

    async def login(self, username: str, password: str) -> bool:
        if not username or not password:
            self.notices.error("Please enter both username and password")
            return False
        try:
            body = await self.api.login(username, password)
        except TransportError as e:
            logger.warning("Admin login failed: %s", e)
            self.notices.error("Login failed. Please try again.")
            return False
        except ApplicationError as e:
            self.notices.error(e.message or "Invalid credentials")
            return False

        self.is_logged_in = True
        self.current_admin = body.get("admin")
        logger.info("Admin %s logged in", username)
        if self.dashboard is not None:
            await self.dashboard.show_section("dashboard")
        self.notices.success("Admin login successful!")
        return True

    def logout(self) -> None:
        self.is_logged_in = False
        self.current_admin = None
        self.notices.success("Logged out successfully!")


class AdminDashboard:
    def __init__(self, api, catalog: Catalog, notices: NoticeBoard):
        self.api = api
        self.catalog = catalog
        self.notices = notices
        self.active_section = "dashboard"
        self.stats: Dict[str, Any] = {}
        self.products: List[Dict[str, Any]] = []
        self.orders: List[Dict[str, Any]] = []
        # From /api/status; None until known
        self.backend_demo_mode: Optional[bool] = None

    @property
    def demo(self):
        return self.catalog.demo

    async def show_section(self, name: str) -> None:
        if name not in SECTIONS:
            raise ValueError(f"Unknown admin section: {name}")
        self.active_section = name
        if name == "dashboard":
            await self.load_stats()
        elif name == "products":
            await self.load_products()
        else:
            await self.load_orders()

    async def load_stats(self) -> None:
        try:
            self.stats = await self.api.stats()
        except StorefrontError as e:
            logger.error("Error loading stats: %s", e)

    async def load_products(self) -> None:
        try:
            backend = await self.api.list_products()
        except TransportError as e:
            logger.error("Error loading admin products: %s", e)
            if len(self.demo):
                self.products = self.demo.products
            return
        except ApplicationError as e:
            logger.error("Error loading admin products: %s", e)
            return
        self.products = merge_catalog(backend, self.demo)

    async def load_orders(self) -> None:
        try:
            self.orders = await self.api.list_orders()
        except StorefrontError as e:
            logger.error("Error loading orders: %s", e)

    async def add_product(self, form: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        payload = build_product_payload(form)
        logger.debug("Adding product: %s", payload)
        try:
            body = await self.api.create_product(payload)
        except TransportError as e:
            logger.error("Error adding product: %s", e)
            self.notices.error("Error adding product")
            return None
        except ApplicationError as e:
            self.notices.error("Error: " + (e.message or "Failed to add product"))
            return None

        self.notices.success("Product added successfully!")
        product = body.get("product")
        if self._keeps_locally(body) and product:
            # The backend does not keep demo products; hold them for this session
            self.demo.add(product)
            self.catalog.refresh()
            self.products = merge_catalog(self.catalog.backend_products, self.demo)
        else:
            await self.load_products()
            await self.catalog.load()
        return product

    def _keeps_locally(self, body: Dict[str, Any]) -> bool:
        if self.backend_demo_mode is False:
            return False
        return "Demo Mode" in (body.get("message") or "")

    async def delete_product(self, product_id: str) -> bool:
        if self.demo.remove(product_id):
            self.notices.success("Product deleted successfully!")
            await self.load_products()
            self.catalog.refresh()
            return True
        try:
            await self.api.delete_product(product_id)
        except TransportError as e:
            self.notices.error("Error deleting product: " + e.message)
            return False
        except ApplicationError as e:
            self.notices.error("Failed to delete: " + (e.message or "Unknown error"))
            return False
        self.notices.success("Product deleted successfully!")
        await self.load_products()
        await self.catalog.load()
        return True

    async def update_order_status(self, order_id: str, status: str) -> bool:
        try:
            await self.api.update_order_status(order_id, status)
        except StorefrontError as e:
            self.notices.error(e.message or "Failed to update order")
            return False
        self.notices.success("Order status updated successfully")
        await self.load_orders()
        return True
