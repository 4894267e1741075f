"""
Order handoff.

Turns the cart's read-only order summary into a WhatsApp deep link. No
payment happens here: the shop owner receives the message and follows up.
"""

import re
import webbrowser
from typing import TYPE_CHECKING, Callable, Optional
from urllib.parse import quote

from storefront.derivation import OrderSummary
from storefront.i18n import get_text
from storefront.logging import get_logger
from storefront.services.money import format_money

if TYPE_CHECKING:
    from storefront.session import Storefront

logger = get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"


def _digits(number: str) -> str:
    return re.sub(r"\D", "", number)


def contact_url(number: str) -> str:
    """Plain chat link for the contact page."""
    return f"{WHATSAPP_BASE_URL}{_digits(number)}"


def build_order_message(summary: OrderSummary, currency: str, lang: str) -> str:
    """
    Compose the order text: header, one "name (qty)" line per item, total.
    """
    lines = [get_text("order.header", lang)]
    lines.extend(f"{item.product.name} ({item.quantity})" for item in summary.items)
    lines.append(get_text("order.total", lang, total=format_money(summary.grand_total, currency)))
    return "\n".join(lines)


def build_whatsapp_url(number: str, message: str) -> str:
    return f"{contact_url(number)}?text={quote(message, safe='')}"


class OrderHandoff:
    """Sends the current cart to the shop's WhatsApp number."""

    def __init__(self, session: "Storefront", opener: Callable[[str], object] = webbrowser.open):
        self.session = session
        self.opener = opener

    def build_url(self) -> Optional[str]:
        """Deep link for the current cart, or None when there is nothing to send."""
        s = self.session
        number = s.config.whatsapp_number
        if s.cart.is_empty or not s.catalog.loaded or not number:
            return None
        message = build_order_message(s.cart.summary(), s.config.currency, s.language)
        return build_whatsapp_url(number, message)

    def submit(self) -> Optional[str]:
        """Open the deep link. Returns the URL, or None if nothing was sent."""
        url = self.build_url()
        if url is None:
            return None
        self.opener(url)
        logger.info("Order handed off (%s items)", self.session.cart.total_count)
        return url
