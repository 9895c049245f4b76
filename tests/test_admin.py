"""Tests for the admin session and dashboard against the in-memory (demo mode) backend."""
import httpx
import pytest

from storefront.client.admin import AdminDashboard, AdminSession, build_product_payload, parse_int
from storefront.client.catalog import Catalog, CatalogRenderer, DemoCatalog
from storefront.client.notices import NoticeBoard
from support import CUSTOMER, RequestLog, mock_api

PRODUCT_FORM = {
    "name": "Chuck 70",
    "brand": "Converse",
    "price": "1499",
    "originalPrice": "",
    "image": "https://example.com/chuck.png",
    "category": "",
    "badge": "",
    "featured": "on",
}


def _panel(api):
    notices = NoticeBoard()
    catalog = Catalog(api, CatalogRenderer(), DemoCatalog())
    dashboard = AdminDashboard(api, catalog, notices)
    return AdminSession(api, notices, dashboard=dashboard), dashboard


class TestPayload:
    def test_form_values_are_converted(self):
        payload = build_product_payload({**PRODUCT_FORM, "originalPrice": "4999.99"})

        assert payload["price"] == 1499
        assert payload["originalPrice"] == 4999
        assert payload["category"] == "shoes"
        assert payload["badge"] == ""
        assert payload["featured"] is True

    def test_unchecked_featured_and_missing_original_price(self):
        payload = build_product_payload({**PRODUCT_FORM, "featured": None})

        assert payload["featured"] is False
        assert payload["originalPrice"] is None

    @pytest.mark.parametrize("value,expected", [("12", 12), ("12.9", 12), (" 7x", 7), ("x", None), (None, None)])
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected


@pytest.mark.anyio
async def test_blank_login_makes_no_request():
    log = RequestLog()
    session, _ = _panel(mock_api(log))

    assert await session.login("", "pass123") is False
    assert log.requests == []
    assert session.notices.current.message == "Please enter both username and password"


@pytest.mark.anyio
async def test_wrong_password_shows_server_message(api):
    session, _ = _panel(api)

    assert await session.login("sujal", "nope") is False
    assert session.is_logged_in is False
    assert session.notices.current.message == "Invalid credentials (Demo Mode)"


@pytest.mark.anyio
async def test_login_opens_dashboard_with_stats(api):
    session, dashboard = _panel(api)

    assert await session.login("sujal", "pass123") is True

    assert session.is_logged_in is True
    assert session.current_admin == {"username": "sujal", "role": "admin"}
    assert dashboard.active_section == "dashboard"
    assert dashboard.stats["totalProducts"] == 4


@pytest.mark.anyio
async def test_login_transport_failure():
    session, _ = _panel(mock_api(RequestLog(exc=httpx.ConnectError)))

    assert await session.login("sujal", "pass123") is False
    assert session.notices.current.message == "Login failed. Please try again."


@pytest.mark.anyio
async def test_logout_resets_session(api):
    session, _ = _panel(api)
    await session.login("sujal", "pass123")

    session.logout()

    assert session.is_logged_in is False
    assert session.current_admin is None


@pytest.mark.anyio
async def test_unknown_section_raises(api):
    _, dashboard = _panel(api)

    with pytest.raises(ValueError):
        await dashboard.show_section("settings")


@pytest.mark.anyio
async def test_sections_fetch_on_every_activation(api):
    await api.place_order({**CUSTOMER, "items": [{"productId": "demo1", "name": "Air Max 270", "price": 1999}]})
    _, dashboard = _panel(api)

    await dashboard.show_section("orders")
    assert len(dashboard.orders) == 1

    await api.place_order({**CUSTOMER, "items": [{"productId": "demo2", "name": "Air Force 1", "price": 1999}]})
    await dashboard.show_section("products")
    await dashboard.show_section("orders")

    assert dashboard.active_section == "orders"
    assert len(dashboard.orders) == 2
    assert len(dashboard.products) == 4


@pytest.mark.anyio
async def test_demo_mode_product_stays_local(api):
    _, dashboard = _panel(api)
    await dashboard.catalog.load()

    product = await dashboard.add_product(PRODUCT_FORM)

    assert product["id"].startswith("demo")
    assert product["id"] in dashboard.demo
    assert product["id"] in dashboard.catalog.renderer.rendered_ids()
    assert dashboard.catalog.renderer.find_grouping("Converse").title == "Converse Collection"
    assert product["id"] in [p["id"] for p in dashboard.products]
    assert product["id"] not in [p["id"] for p in await api.list_products()]
    assert dashboard.notices.current.message == "Product added successfully!"


@pytest.mark.anyio
async def test_durable_backend_never_holds_products_locally():
    created = {"id": "demo1700000000000", "name": "Chuck 70", "brand": "Converse", "price": 1499}

    def handler(request):
        if request.method == "POST":
            return httpx.Response(200, json={
                "success": True, "message": "Product added successfully (Demo Mode)", "product": created,
            })
        return httpx.Response(200, json={"success": True, "products": []})

    _, dashboard = _panel(mock_api(handler))
    dashboard.backend_demo_mode = False

    assert await dashboard.add_product(PRODUCT_FORM) == created

    assert len(dashboard.demo) == 0
    assert dashboard.products == []
    assert dashboard.catalog.renderer.rendered_ids() == []


@pytest.mark.anyio
async def test_invalid_product_is_reported(api):
    _, dashboard = _panel(api)

    assert await dashboard.add_product({**PRODUCT_FORM, "price": "free"}) is None
    assert dashboard.notices.current.message.startswith("Error: Invalid request")


@pytest.mark.anyio
async def test_delete_demo_product_is_local_only():
    log = RequestLog(json={"success": True, "products": []})
    _, dashboard = _panel(mock_api(log))
    dashboard.demo.add({"id": "demo1700000000000", "name": "Chuck 70", "brand": "Converse", "price": 1499})

    assert await dashboard.delete_product("demo1700000000000") is True

    assert "demo1700000000000" not in dashboard.demo
    assert all(r.method != "DELETE" for r in log.requests)


@pytest.mark.anyio
async def test_delete_backend_product(api):
    _, dashboard = _panel(api)

    assert await dashboard.delete_product("demo4") is True

    assert "demo4" not in [p["id"] for p in dashboard.products]
    assert len(dashboard.products) == 3


@pytest.mark.anyio
async def test_delete_unknown_product_reports_failure(api):
    _, dashboard = _panel(api)

    assert await dashboard.delete_product("missing") is False
    assert dashboard.notices.current.message == "Failed to delete: Product not found"


@pytest.mark.anyio
async def test_update_order_status_refreshes_orders(api):
    body = await api.place_order({**CUSTOMER, "items": [{"productId": "demo1", "name": "Air Max 270", "price": 1999}]})
    _, dashboard = _panel(api)

    assert await dashboard.update_order_status(body["order"]["id"], "shipped") is True

    assert dashboard.orders[0]["status"] == "shipped"


@pytest.mark.anyio
async def test_update_unknown_order_reports_failure(api):
    _, dashboard = _panel(api)

    assert await dashboard.update_order_status("ORD-MISSING1", "shipped") is False
    assert dashboard.notices.current.message == "Order not found"
