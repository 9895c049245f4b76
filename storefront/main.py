"""
# `storefront/main.py`: Application entry point

## Overview
Builds the FastAPI application: picks the storage backend once, wires the routers,
configures CORS, renders every error as `{success: false, message}` and seeds the
default admin/products on startup.

## Routers
**Public:**
- `/api/products`
- `/api/orders`
- `/api/admin/login`

**Admin (prefix `/api/admin`):**
- `/products`
- `/orders`
- `/stats`

**System:**
- `/health`
- `/api/status` (reports demo mode)
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.config import Settings, settings as default_settings
from storefront.repositories import StoreError, StorefrontStore, build_store
from storefront.routers import admin_dashboard, auth, orders, products
from storefront.services.seed import seed_defaults

logger = logging.getLogger("storefront.app")


def _validation_message(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        fields.append(".".join(loc) or err.get("msg", "body"))
    return "Invalid request: " + ", ".join(fields) if fields else "Invalid request"


def create_app(settings: Optional[Settings] = None, store: Optional[StorefrontStore] = None) -> FastAPI:
    settings = settings or default_settings
    store = store or build_store(settings)

    app = FastAPI(
        title="Storefront API",
        description="Catalog, orders and admin panel backend for the sneaker storefront.",
        version="1.0.0",
        redirect_slashes=False,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include public routers
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(auth.router)

    # Include admin routers (with prefix /api/admin)
    app.include_router(products.admin_router, prefix="/api/admin")
    app.include_router(orders.admin_router, prefix="/api/admin")
    app.include_router(admin_dashboard.router, prefix="/api/admin")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"success": False, "message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"success": False, "message": _validation_message(exc)}, status_code=400)

    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"success": False, "message": str(exc)}, status_code=500)

    @app.get("/health", tags=["System"])
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api/status", tags=["System"])
    def api_status():
        return {
            "status": "OK",
            "demoMode": not store.durable,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.on_event("startup")
    def _seed():
        if settings.seed_defaults:
            seed_defaults(store, settings.admin_username, settings.admin_password)
        logger.info("Admin login: %s (demo mode: %s)", settings.admin_username, not store.durable)

    return app


app = create_app()

# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=True)
