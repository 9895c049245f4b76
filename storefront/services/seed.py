# storefront/services/seed.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from storefront.repositories.base import StorefrontStore
from storefront.schemas.product import ProductCreate
from storefront.services.products_helpers import build_product_doc

logger = logging.getLogger("storefront.seed")

_SIZES = ["7", "8", "9", "10", "11"]

DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Air Max 270",
        "brand": "Nike",
        "price": 1999,
        "originalPrice": 8999,
        "image": "https://static.nike.com/a/images/t_PDP_1280_v1/f_auto,q_auto:eco/skwgyqrbfzhu6uyeh0gg/air-max-270-mens-shoes-KkLcGR.png",
        "badge": "BESTSELLER",
        "description": "Premium Nike Air Max 270 with maximum comfort and style",
        "sizes": _SIZES,
        "colors": ["Black", "White", "Blue"],
        "featured": True,
    },
    {
        "name": "Air Force 1",
        "brand": "Nike",
        "price": 1999,
        "originalPrice": 7999,
        "image": "https://static.nike.com/a/images/t_PDP_1280_v1/f_auto,q_auto:eco/b7d9211c-26e7-431a-ac24-b0540fb3c00f/air-force-1-07-mens-shoes-jBrhbr.png",
        "badge": "NEW",
        "description": "Classic Nike Air Force 1 - timeless design",
        "sizes": _SIZES,
        "colors": ["White", "Black"],
        "featured": True,
    },
    {
        "name": "Ultraboost 22",
        "brand": "Adidas",
        "price": 2499,
        "originalPrice": 9999,
        "image": "https://assets.adidas.com/images/h_840,f_auto,q_auto,fl_lossy,c_fill,g_auto/fbaf991a78bc4896a3e9ad7800abcec6_9366/Ultraboost_22_Shoes_Black_GZ0127_01_standard.jpg",
        "badge": "HOT",
        "description": "Adidas Ultraboost 22 - Ultimate energy return",
        "sizes": _SIZES,
        "colors": ["Black", "White", "Blue"],
        "featured": True,
    },
    {
        "name": "Suede Classic",
        "brand": "Puma",
        "price": 1799,
        "originalPrice": 6999,
        "image": "https://images.puma.com/image/upload/f_auto,q_auto,b_rgb:fafafa,w_2000,h_2000/global/374915/25/sv01/fnd/IND/fmt/png/Suede-Classic-XXI-Sneakers",
        "badge": "CLASSIC",
        "description": "Puma Suede Classic - Timeless street style",
        "sizes": _SIZES,
        "colors": ["Red", "Blue", "Black"],
        "featured": False,
    },
]


def seed_defaults(store: StorefrontStore, admin_username: str, admin_password: str) -> None:
    """
    Ensure the default admin exists and, when the catalog is empty, insert the default products.
    Safe to call on every startup.
    """
    store.ensure_admin(admin_username, admin_password)
    logger.info("Default admin ensured: %s", admin_username)

    existing = store.count_products()
    if existing > 0:
        logger.info("%d products already exist", existing)
        return

    if store.durable:
        docs = [build_product_doc(ProductCreate.model_validate(p)) for p in DEFAULT_PRODUCTS]
    else:
        docs = [
            build_product_doc(ProductCreate.model_validate(p), product_id=f"demo{i}")
            for i, p in enumerate(DEFAULT_PRODUCTS, start=1)
        ]
    n = store.insert_products(docs)
    logger.info("%d default products initialized", n)
