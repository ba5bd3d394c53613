"""Order totals attachment: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.lookup import get_order
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AttachTotals:
    order_id = Identifier(required=True)
    totals = Text(required=True)  # JSON: list of {code, title, value, priority}


@ordering.command_handler(part_of=Order)
class AttachTotalsHandler:
    @handle(AttachTotals)
    def attach_totals(self, command):
        totals_data = json.loads(command.totals) if isinstance(command.totals, str) else command.totals

        order = get_order(command.order_id)
        order.attach_totals(totals_data)
        current_domain.repository_for(Order).add(order)
        return len(order.totals)
