"""
storefront/client/catalog.py - Catalog merge and brand grouping.

Backend products and the session's demo products are concatenated (backend first,
no dedup: demo ids are `demo<millis>` and cannot collide). Each product becomes a
card in its brand grouping; featured products get an independent copy in
"new arrivals". Cards produced here are tagged dynamic and are cleared before the
next render, so rendering the same input twice leaves the same state.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from storefront.client.errors import ApplicationError, TransportError

logger = logging.getLogger("storefront.client.catalog")

KNOWN_BRANDS = ("nike", "adidas", "puma")

BRAND_LOGOS = {
    "nike": "https://logos-world.net/wp-content/uploads/2020/04/Nike-Logo.png",
    "adidas": "https://logos-world.net/wp-content/uploads/2020/04/Adidas-Logo.png",
    "puma": "https://logos-world.net/wp-content/uploads/2020/04/Puma-Logo.png",
    "reebok": "https://logos-world.net/wp-content/uploads/2020/04/Reebok-Logo.png",
    "converse": "https://logos-world.net/wp-content/uploads/2020/04/Converse-Logo.png",
}
PLACEHOLDER_LOGO = "https://via.placeholder.com/100x50?text={brand}"


def merge_catalog(backend: Iterable[Dict[str, Any]], demo: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [*backend, *demo]


def _amount(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class ProductCard:
    product: Dict[str, Any]
    dynamic: bool = True

    @property
    def product_id(self) -> str:
        return str(self.product.get("id") or self.product.get("_id") or "")

    @property
    def brand_tag(self) -> str:
        return str(self.product.get("brand") or "").upper()

    @property
    def price_text(self) -> str:
        text = f"₹{_amount(self.product.get('price'))}"
        if self.product.get("originalPrice"):
            text += f" ₹{_amount(self.product['originalPrice'])}"
        return text

    def cart_args(self) -> Dict[str, Any]:
        """Arguments for CartEngine.add_item."""
        p = self.product
        return {
            "product_id": self.product_id,
            "name": p.get("name", ""),
            "price": p.get("price"),
            "image": p.get("image", ""),
            "brand": p.get("brand", ""),
        }


@dataclass
class BrandGrouping:
    key: str
    title: str
    logo: str
    cards: List[ProductCard] = field(default_factory=list)

    def matches(self, brand: str) -> bool:
        title = self.title.lower()
        brand = brand.lower()
        return brand in title or (brand in KNOWN_BRANDS and brand in title)

    def clear_dynamic(self) -> None:
        self.cards = [c for c in self.cards if not c.dynamic]


def grouping_key(brand: str) -> str:
    return f"{brand.lower()}-section"


def new_grouping(brand: str) -> BrandGrouping:
    logo = BRAND_LOGOS.get(brand.lower()) or PLACEHOLDER_LOGO.format(brand=brand)
    return BrandGrouping(key=grouping_key(brand), title=f"{brand} Collection", logo=logo)


def default_groupings() -> List[BrandGrouping]:
    return [new_grouping(b) for b in ("Nike", "Adidas", "Puma")]


class DemoCatalog:
    """Products created while the backend runs in demo mode. Session only, never sent back."""

    def __init__(self) -> None:
        self._products: List[Dict[str, Any]] = []

    def add(self, product: Dict[str, Any]) -> None:
        self._products.append(copy.deepcopy(product))

    def remove(self, product_id: str) -> bool:
        for i, p in enumerate(self._products):
            if p.get("id") == product_id:
                del self._products[i]
                return True
        return False

    def __contains__(self, product_id: object) -> bool:
        return any(p.get("id") == product_id for p in self._products)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> List[Dict[str, Any]]:
        return list(self._products)


class CatalogRenderer:
    def __init__(self, groupings: Optional[List[BrandGrouping]] = None):
        self.groupings: List[BrandGrouping] = default_groupings() if groupings is None else groupings
        self.new_arrivals: List[ProductCard] = []

    def find_grouping(self, brand: str) -> Optional[BrandGrouping]:
        for g in self.groupings:
            if g.matches(brand):
                return g
        key = grouping_key(brand)
        for g in self.groupings:
            if g.key == key:
                return g
        return None

    def render(self, products: Iterable[Dict[str, Any]]) -> None:
        self.new_arrivals = []
        for g in self.groupings:
            g.clear_dynamic()

        for product in products:
            card = ProductCard(copy.deepcopy(product))
            if product.get("featured"):
                self.new_arrivals.append(ProductCard(copy.deepcopy(product)))

            brand = str(product.get("brand") or "")
            grouping = self.find_grouping(brand)
            if grouping is None:
                grouping = new_grouping(brand)
                self.groupings.append(grouping)
                logger.debug("Created brand grouping %s", grouping.key)
            grouping.cards.append(card)

    def cards(self) -> List[ProductCard]:
        return [c for g in self.groupings for c in g.cards]

    def rendered_ids(self) -> List[str]:
        return [c.product_id for c in self.cards()]


class Catalog:
    """Loads the backend listing and keeps the rendered view in sync with the demo catalog."""

    def __init__(self, api, renderer: CatalogRenderer, demo: DemoCatalog):
        self.api = api
        self.renderer = renderer
        self.demo = demo
        self.backend_products: List[Dict[str, Any]] = []

    def all_products(self) -> List[Dict[str, Any]]:
        return merge_catalog(self.backend_products, self.demo)

    async def load(self) -> List[Dict[str, Any]]:
        try:
            self.backend_products = await self.api.list_products()
        except TransportError as e:
            logger.error("Error loading products: %s", e)
            # Backend unreachable: show demo products only
            if len(self.demo):
                self.renderer.render(self.demo.products)
            return self.demo.products
        except ApplicationError as e:
            logger.error("Error loading products: %s", e)
            return self.all_products()
        products = self.all_products()
        self.renderer.render(products)
        return products

    def refresh(self) -> None:
        """Re-render from the last listing plus the current demo products, without a fetch."""
        self.renderer.render(self.all_products())
