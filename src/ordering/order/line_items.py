"""Line item attachment: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.lookup import get_order
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AttachLineItems:
    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of line item dicts with nested options


@ordering.command_handler(part_of=Order)
class AttachLineItemsHandler:
    @handle(AttachLineItems)
    def attach_line_items(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = get_order(command.order_id)
        order.attach_line_items(items_data)
        current_domain.repository_for(Order).add(order)
        return len(order.line_items)
