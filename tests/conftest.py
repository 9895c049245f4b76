"""Shared fixtures: an in-memory backend, the FastAPI app and an async API client bound to it."""
import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.client.api import StorefrontAPI
from storefront.config import Settings
from storefront.main import create_app
from storefront.repositories import MemoryStore
from storefront.services.seed import seed_defaults

ADMIN_USERNAME = "sujal"
ADMIN_PASSWORD = "pass123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        storage_backend="memory",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        cart_file=str(tmp_path / "local_storage.json"),
        notify_delay_seconds=0.0,
    )


@pytest.fixture
def store():
    store = MemoryStore()
    seed_defaults(store, ADMIN_USERNAME, ADMIN_PASSWORD)
    return store


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def api(app):
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    yield StorefrontAPI(http)
    await http.aclose()


