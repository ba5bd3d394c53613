"""Mail data: the flattened view of an order that mail templates render.

Built from the stored order plus read-only lookups (directory, payment
gateways). Every value is display-ready: currency is formatted, dates are
formatted, missing lookups fall back to readable placeholders.
"""

import structlog

from ordering.directory import get_directory
from ordering.gateway import get_gateways
from ordering.order.lookup import get_order

logger = structlog.get_logger(__name__)

NO_PAYMENT = "No payment"
COLLECTION_ADDRESS = "Collection"
OPTION_SEPARATOR = " = "


def format_currency(value, symbol: str = "$") -> str:
    amount = float(value or 0.0)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def payment_options(gateways) -> dict[str, str]:
    """Gateway code -> display name (the code itself when a gateway has no name)."""
    return {g["code"]: g.get("name") or g["code"] for g in gateways.list_gateways()}


class MailDataBuilder:
    def __init__(self, settings, directory=None, gateways=None):
        self.settings = settings
        self._directory = directory
        self._gateways = gateways

    @property
    def directory(self):
        return self._directory or get_directory()

    @property
    def gateways(self):
        return self._gateways or get_gateways()

    def money(self, value) -> str:
        return format_currency(value, self.settings.currency_symbol)

    def build(self, order_id) -> dict:
        """Return the mail payload for ``order_id``. Raises NotFound for unknown orders."""
        order = get_order(order_id)

        data = {
            "order_number": str(order.id),
            "order_view_url": f"{self.settings.site_url.rstrip('/')}/account/orders/view/{order.id}",
            "order_type": order.order_type,
            "order_time": order.order_date_time.strftime("%H:%M %d %b") if order.order_date_time else "",
            "order_date": order.created_at.strftime("%d %b %y") if order.created_at else "",
            "order_comment": order.comment or "",
            "order_payment": self._payment_label(order.payment),
            "order_menus": self._menus(order),
            "order_totals": [
                {
                    "order_total_title": total.title,
                    "order_total_value": self.money(total.value),
                    "priority": total.priority,
                }
                for total in order.sorted_totals()
            ],
            "order_address": COLLECTION_ADDRESS,
            "first_name": "",
            "last_name": "",
            "email": "",
            "telephone": "",
        }

        directory = self.directory
        if order.customer_id:
            customer = directory.find_customer(str(order.customer_id))
            if customer is not None:
                data.update(
                    first_name=customer.first_name,
                    last_name=customer.last_name,
                    email=customer.email,
                    telephone=customer.telephone or "",
                )
            else:
                logger.warning("Customer not found for mail data", order_id=str(order.id))

        if order.address_id:
            address = directory.find_address(order.customer_id, str(order.address_id))
            if address is not None:
                data["order_address"] = address.formatted()

        if order.location_id:
            location = directory.find_location(str(order.location_id))
            if location is not None:
                data["location_name"] = location.name
                data["location_email"] = location.email or ""

        return data

    def _payment_label(self, code) -> str:
        if not code:
            return NO_PAYMENT
        return payment_options(self.gateways).get(code, NO_PAYMENT)

    def _menus(self, order) -> list[dict]:
        menus = []
        for item in order.line_items:
            options = [
                f"{option.name}{OPTION_SEPARATOR}{self.money(option.price)}" for option in order.options_for(item.id)
            ]
            menus.append(
                {
                    "menu_name": item.name,
                    "menu_quantity": item.quantity,
                    "menu_price": self.money(item.price),
                    "menu_subtotal": self.money(item.subtotal),
                    "menu_options": "\n".join(options),
                    "menu_comment": item.comment or "",
                }
            )
        return menus
