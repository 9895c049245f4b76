"""
storefront/client/cart_store.py - Durable local state for the shopper's cart.

A small key/value file (the local-storage equivalent). The cart lives under one
slot and is always written whole; other slots in the same file are left untouched.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from storefront.schemas.cart import CartEntry

logger = logging.getLogger("storefront.client.cart_store")


class CartStore:
    def __init__(self, path: str | os.PathLike, key: str = "cart"):
        self.path = Path(path)
        self.key = key

    def _read_slots(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable local storage %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> List[CartEntry]:
        """Empty when the slot is absent or corrupt."""
        raw = self._read_slots().get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Discarding corrupt cart slot %r", self.key)
            return []
        try:
            return [CartEntry.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.warning("Discarding corrupt cart slot %r: %s", self.key, e)
            return []

    def save(self, entries: List[CartEntry]) -> None:
        slots = self._read_slots()
        slots[self.key] = [e.model_dump(by_alias=True) for e in entries]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(slots, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)


class MemoryCartStore(CartStore):
    """Same contract, kept in memory."""

    def __init__(self, key: str = "cart"):
        self.key = key
        self._saved: List[Dict[str, Any]] = []

    def load(self) -> List[CartEntry]:
        return [CartEntry.model_validate(item) for item in self._saved]

    def save(self, entries: List[CartEntry]) -> None:
        self._saved = [e.model_dump(by_alias=True) for e in entries]
