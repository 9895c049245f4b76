import logging

from storefront.config import Settings, init_firestore
from storefront.repositories.base import StoreError, StorefrontStore
from storefront.repositories.memory_store import MemoryStore

logger = logging.getLogger("storefront.store")

__all__ = ["StoreError", "StorefrontStore", "MemoryStore", "build_store"]


def build_store(settings: Settings) -> StorefrontStore:
    """Pick the storage backend once, at startup."""
    if settings.storage_backend == "firestore":
        from storefront.repositories.firestore_store import FirestoreStore

        logger.info("Using Firestore storage (prefix=%r)", settings.firebase_collection_prefix)
        return FirestoreStore(init_firestore(settings), prefix=settings.firebase_collection_prefix)
    logger.warning("Using in-memory storage: demo mode, writes are not durable")
    return MemoryStore()
