"""
storefront/client/storefront.py - Composition root of the storefront core.

Builds every owned state object once (cart, catalog, checkout, admin panel,
notifier) and wires the cart listeners. `start()` must run inside the event loop
that will drive the core, since the scheduler binds to it.
"""
from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from storefront.client.admin import AdminDashboard, AdminSession
from storefront.client.api import StorefrontAPI
from storefront.client.cart import CartEngine
from storefront.client.cart_store import CartStore, MemoryCartStore
from storefront.client.catalog import Catalog, CatalogRenderer, DemoCatalog
from storefront.client.checkout import CheckoutWorkflow
from storefront.client.errors import TransportError
from storefront.client.notices import NoticeBoard
from storefront.client.notifier import OrderNotifier
from storefront.client.views import CartView, CheckoutView, ConfirmationView

logger = logging.getLogger("storefront.client")


class Storefront:
    def __init__(
        self,
        settings,
        api: Optional[StorefrontAPI] = None,
        scheduler: Optional[AsyncIOScheduler] = None,
        cart_store: Optional[CartStore] = None,
        opener=None,
    ):
        self.settings = settings
        self.api = api or StorefrontAPI.from_settings(settings)
        self.scheduler = scheduler or AsyncIOScheduler()

        if cart_store is None:
            if settings.cart_file:
                cart_store = CartStore(settings.cart_file, key=settings.cart_storage_key)
            else:
                cart_store = MemoryCartStore(key=settings.cart_storage_key)
        self.notices = NoticeBoard()
        self.cart = CartEngine(cart_store)
        self.cart_view = CartView()
        self.cart.subscribe(self.cart_view.refresh)
        self.cart_view.refresh(self.cart)

        self.demo = DemoCatalog()
        self.catalog = Catalog(self.api, CatalogRenderer(), self.demo)

        if opener is None:
            self.notifier = OrderNotifier.from_settings(settings, self.scheduler)
        else:
            self.notifier = OrderNotifier.from_settings(settings, self.scheduler, opener=opener)
        self.checkout = CheckoutWorkflow(
            self.cart,
            self.api,
            self.notices,
            notifier=self.notifier,
            checkout_view=CheckoutView(),
            confirmation_view=ConfirmationView(),
        )

        self.dashboard = AdminDashboard(self.api, self.catalog, self.notices)
        self.admin = AdminSession(self.api, self.notices, dashboard=self.dashboard)

    @property
    def backend_demo_mode(self) -> Optional[bool]:
        return self.dashboard.backend_demo_mode

    def add_to_cart(self, product_id: str, name: str, price, image: str = "", brand: str = "") -> None:
        self.cart.add_item(product_id, name, price, image, brand)
        self.notices.success(f"{name} added to cart!")

    async def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
        try:
            self.dashboard.backend_demo_mode = bool((await self.api.status()).get("demoMode"))
        except TransportError as e:
            logger.warning("Backend status unavailable: %s", e)
        await self.catalog.load()
        logger.info("Storefront core started against %s", self.settings.api_base_url)

    async def aclose(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        await self.api.aclose()
