#!/usr/bin/env python3
"""
Creates an admin record in the configured store, or resets its password.

    python -m storefront.create_admin <username> <password>

Only meaningful with STORAGE_BACKEND=firestore; the in-memory store is gone when the process exits.
"""
import logging
import sys

from storefront.config import settings
from storefront.repositories import StorefrontStore, build_store

logger = logging.getLogger("storefront.create_admin")


def create_admin(store: StorefrontStore, username: str, password: str) -> bool:
    """Creates the admin or overwrites its password."""
    if not username or not password:
        logger.error("Username and password are required")
        return False
    admin = store.ensure_admin(username, password, reset=True)
    logger.info("Admin ready: %s (role=%s)", admin.get("username"), admin.get("role"))
    return True


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: python -m storefront.create_admin <username> <password>")
        print("Example: python -m storefront.create_admin sujal pass123")
        return 1

    if settings.demo_mode:
        logger.warning("STORAGE_BACKEND is memory: the admin will not outlive this process")

    username, password = args
    print(f"Setting admin: {username}")
    if create_admin(build_store(settings), username, password):
        print("Admin saved. Log in from the storefront admin panel.")
        return 0
    print("Failed to save admin")
    return 1


if __name__ == "__main__":
    sys.exit(main())
