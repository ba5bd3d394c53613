"""Template registry: maps mail kinds to template classes.

Each template renders a subject and body from the mail data of an order.
"""

import re

from notifications.templates.order import OrderTemplate
from notifications.templates.order_alert import OrderAlertTemplate
from notifications.templates.order_update import OrderUpdateTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    OrderTemplate.kind: OrderTemplate,
    OrderUpdateTemplate.kind: OrderUpdateTemplate,
    OrderAlertTemplate.kind: OrderAlertTemplate,
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def get_template(kind: str):
    """Look up a template class by mail kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for mail kind: {kind}")
    return template_cls


def fill_placeholders(text: str, data: dict) -> str:
    """Replace ``{name}`` with scalar values from ``data``; unknown names are left as-is."""

    def _value(match):
        value = data.get(match.group(1))
        if value is None or isinstance(value, (list, dict)):
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(_value, text or "")
