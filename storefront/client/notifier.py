"""
storefront/client/notifier.py - Tell the operator about a new order over WhatsApp.

The message is prefilled into a `wa.me` link and opened shortly after the
confirmation is shown. Best effort: an opener failure is logged, never retried and
never surfaced to the shopper.
"""
from __future__ import annotations

import logging
import webbrowser
from datetime import datetime, timedelta
from typing import Any, Callable, Optional
from urllib.parse import quote

from storefront.client.checkout import OrderConfirmed

logger = logging.getLogger("storefront.client.notifier")

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def format_amount(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_order_message(order: OrderConfirmed, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    c = order.customer

    message = "🛍️ *New Order Received*\n\n"
    message += f"📋 *Order ID:* {order.order_id}\n"
    message += f"👤 *Customer:* {c.get('customerName', '')}\n"
    message += f"📧 *Email:* {c.get('email', '')}\n"
    message += f"📱 *Phone:* {c.get('phone', '')}\n"
    message += f"📍 *Address:* {c.get('address', '')}"
    if c.get("city"):
        message += f", {c['city']}"
    if c.get("pincode"):
        message += f" - {c['pincode']}"
    message += "\n\n🛒 *Items Ordered:*\n"

    for n, item in enumerate(order.items, start=1):
        price = item.get("price", 0)
        qty = item.get("quantity", 1)
        message += (
            f"{n}. {item.get('name', '')} - ₹{format_amount(price)} x {qty}"
            f" = ₹{format_amount(price * qty)}\n"
        )

    message += f"\n💰 *Total Amount:* ₹{format_amount(order.total)}\n"
    message += f"📅 *Order Date:* {now.strftime('%d/%m/%Y, %H:%M:%S')}\n\n"
    message += "Please process this order. Thank you! 🙏"
    return message


def build_whatsapp_url(phone: str, message: str, country_code: str = "91") -> str:
    return f"https://wa.me/{country_code}{phone}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


class OrderNotifier:
    def __init__(
        self,
        scheduler,
        phone: str,
        country_code: str = "91",
        delay_seconds: float = 1.0,
        opener: Callable[[str], Any] = webbrowser.open,
    ):
        self.scheduler = scheduler
        self.phone = phone
        self.country_code = country_code
        self.delay_seconds = delay_seconds
        self.opener = opener

    @classmethod
    def from_settings(cls, settings, scheduler, opener: Callable[[str], Any] = webbrowser.open) -> "OrderNotifier":
        return cls(
            scheduler,
            phone=settings.operator_phone,
            country_code=settings.whatsapp_country_code,
            delay_seconds=settings.notify_delay_seconds,
            opener=opener,
        )

    def open_link(self, url: str) -> None:
        try:
            self.opener(url)
        except Exception:
            logger.exception("Could not open WhatsApp link")

    def notify(self, order: OrderConfirmed) -> str:
        """Schedule the link to open after the configured delay; returns the link."""
        url = build_whatsapp_url(self.phone, build_order_message(order), self.country_code)
        run_at = datetime.now() + timedelta(seconds=self.delay_seconds)
        self.scheduler.add_job(
            self.open_link,
            "date",
            run_date=run_at,
            args=[url],
            id=f"notify-{order.order_id}",
            replace_existing=True,
        )
        logger.debug("WhatsApp notification for %s scheduled at %s", order.order_id, run_at)
        return url
