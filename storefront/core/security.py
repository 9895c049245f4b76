"""
# `storefront/core/security.py`: Admin gate

The admin panel is a UI gate, not a security boundary: a single plaintext
username/password comparison against the stored admin record. There is no token,
no expiry and no server-side session; admin endpoints are not protected beyond it.

## `authenticate_admin(store, username, password) -> dict`
1. Blank username or password → `401 Invalid credentials`.
2. `store.find_admin(...)` compares in plaintext.
3. Success → `{"username", "role"}` (password never leaves the store).
"""
import logging
from typing import Dict

from fastapi import HTTPException, Request, status

from storefront.repositories.base import StorefrontStore

logger = logging.getLogger("storefront.security")


def get_store(request: Request) -> StorefrontStore:
    """Dependency: the storage backend chosen at startup."""
    return request.app.state.store


def authenticate_admin(store: StorefrontStore, username: str, password: str) -> Dict[str, str]:
    if not username or not password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid credentials{store.message_suffix}",
        )
    admin = store.find_admin(username, password)
    if not admin:
        logger.info("Rejected admin login for %r", username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid credentials{store.message_suffix}",
        )
    return {"username": admin.get("username", username), "role": admin.get("role", "admin")}
