"""Order deletion: command and handler.

Deleting an order removes the whole aggregate: line items, options and totals
with it, plus the status history and coupon redemptions that point at it.
Unknown ids are ignored.
"""

import json

import structlog
from protean import handle
from protean.fields import Text
from protean.utils.globals import current_domain

from ordering.coupon.ledger import CouponLedger
from ordering.domain import ordering
from ordering.exceptions import NotFound
from ordering.history.recorder import ORDER_SUBJECT, StatusHistoryRecorder
from ordering.order.lookup import get_order
from ordering.order.order import Order, OrderLineItem, OrderLineItemOption, OrderTotal

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrders:
    order_ids = Text(required=True)  # JSON: list of order ids


@ordering.command_handler(part_of=Order)
class DeleteOrdersHandler:
    @handle(DeleteOrders)
    def delete_orders(self, command):
        order_ids = json.loads(command.order_ids) if isinstance(command.order_ids, str) else command.order_ids

        recorder = StatusHistoryRecorder()
        ledger = CouponLedger()
        deleted = 0
        for order_id in dict.fromkeys(str(order_id) for order_id in order_ids):
            try:
                order = get_order(order_id)
            except NotFound:
                continue

            _delete_children(order.line_item_options, OrderLineItemOption)
            _delete_children(order.line_items, OrderLineItem)
            _delete_children(order.totals, OrderTotal)
            recorder.purge(ORDER_SUBJECT, order_id)
            ledger.reverse(order_id)
            current_domain.repository_for(Order)._dao.delete(order)
            deleted += 1

        logger.info("Orders deleted", requested=len(order_ids), deleted=deleted)
        return deleted


def _delete_children(children, entity_cls):
    dao = current_domain.repository_for(entity_cls)._dao
    for child in list(children):
        dao.delete(child)
