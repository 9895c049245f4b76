"""
storefront/client/api.py - Async client for the storefront backend.

The only I/O seam of the storefront core. Every call either returns the parsed
`{success: true, ...}` body or raises:
- TransportError: httpx failure, a request body that cannot be encoded, or a
  response body that is not a JSON object
- NotFoundError: `success` not true and HTTP 404
- ApplicationError: `success` not true otherwise (message passed through verbatim)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from storefront.client.errors import ApplicationError, NotFoundError, TransportError

logger = logging.getLogger("storefront.client.api")


class StorefrontAPI:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> "StorefrontAPI":
        return cls(httpx.AsyncClient(base_url=settings.api_base_url, timeout=settings.http_timeout))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            request = self._client.build_request(method, path, json=json, params=params or None)
        except (TypeError, ValueError) as e:
            logger.warning("%s %s: body not encodable: %s", method, path, e)
            raise TransportError(f"Could not encode request: {e}") from e
        try:
            resp = await self._client.send(request)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %r", method, path, e)
            raise TransportError(str(e) or e.__class__.__name__) from e

        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise TransportError(f"HTTP error! status: {resp.status_code}")

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if body.get("success") is True:
            return body

        message = body.get("message") or ""
        if resp.status_code == 404:
            raise NotFoundError(message, status_code=resp.status_code)
        raise ApplicationError(message, status_code=resp.status_code)

    # ---------- catalog ----------
    async def list_products(
        self,
        brand: Optional[str] = None,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "brand": brand,
            "featured": None if featured is None else ("true" if featured else "false"),
            "category": category,
        }
        body = await self._request("GET", "/api/products", params=params)
        return list(body.get("products") or [])

    # ---------- orders ----------
    async def place_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/orders", json=payload)

    # ---------- admin ----------
    async def login(self, username: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/api/admin/login", json={"username": username, "password": password})

    async def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/admin/products", json=payload)

    async def update_product(self, product_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/api/admin/products/{product_id}", json=patch)

    async def delete_product(self, product_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/admin/products/{product_id}")

    async def list_orders(self) -> List[Dict[str, Any]]:
        body = await self._request("GET", "/api/admin/orders")
        return list(body.get("orders") or [])

    async def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        return await self._request("PUT", f"/api/admin/orders/{order_id}", json={"status": status})

    async def stats(self) -> Dict[str, Any]:
        body = await self._request("GET", "/api/admin/stats")
        return dict(body.get("stats") or {})

    async def status(self) -> Dict[str, Any]:
        """`/api/status` has no success envelope."""
        try:
            resp = await self._client.get("/api/status")
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(str(e) or e.__class__.__name__) from e
