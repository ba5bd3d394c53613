"""Order status transition: command and handler.

The handler runs as one unit of work. In order:

    1. load the order and the target status
    2. decide whether this is the order's first processing transition
    3. if so, decrement stock and finalize the coupon redemption
    4. move the order to the new status
    5. append the status history entry
    6. number the invoice on a completed status, when auto-invoicing is on
       and the order has no number yet

Any exception discards every change made above. Notifications are sent by
the caller after the unit of work has committed.
"""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.coupon.ledger import CouponLedger
from ordering.domain import ordering
from ordering.history.recorder import ORDER_SUBJECT, StatusHistoryRecorder
from ordering.inventory.adjuster import InventoryAdjuster
from ordering.invoice.allocator import SequenceAllocator
from ordering.order.lookup import get_order, get_status
from ordering.order.order import Order
from ordering.settings import StockFailurePolicy, WorkflowSettings

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class TransitionOrderStatus:
    order_id = Identifier(required=True)
    status_id = Identifier(required=True)
    comment = Text()
    notify = Boolean()
    actor_id = Identifier()

    # Workflow settings in force for this transition
    processing_statuses = Text(default="[]")  # JSON: list of status ids
    completed_statuses = Text(default="[]")  # JSON: list of status ids
    terminal_statuses = Text(default="[]")  # JSON: list of status ids
    auto_invoicing = Boolean(default=False)
    invoice_prefix = String(max_length=100, default="INV{year}{month}{day}")
    stock_failure_policy = String(choices=StockFailurePolicy, default=StockFailurePolicy.ABORT.value)
    stock_floor = Integer(default=0)

    @classmethod
    def build(cls, order_id, request, settings: WorkflowSettings):
        return cls(
            order_id=str(order_id),
            status_id=request.target_status_id,
            comment=request.comment,
            notify=request.notify,
            actor_id=request.actor_id,
            processing_statuses=json.dumps(sorted(settings.processing_order_status)),
            completed_statuses=json.dumps(sorted(settings.completed_order_status)),
            terminal_statuses=json.dumps(sorted(settings.terminal_order_status)),
            auto_invoicing=settings.auto_invoicing,
            invoice_prefix=settings.invoice_prefix,
            stock_failure_policy=settings.stock_failure_policy.value,
            stock_floor=settings.stock_floor,
        )


def _ids(raw) -> set[str]:
    values = json.loads(raw) if isinstance(raw, str) else (raw or [])
    return {str(value) for value in values}


@ordering.command_handler(part_of=Order)
class TransitionOrderStatusHandler:
    @handle(TransitionOrderStatus)
    def transition_order_status(self, command):
        processing = _ids(command.processing_statuses)
        completed = _ids(command.completed_statuses)
        terminal = _ids(command.terminal_statuses)
        recorder = StatusHistoryRecorder()

        order = get_order(command.order_id)
        status = get_status(command.status_id)
        status_id = str(status.id)
        order.assert_can_transition(status_id, terminal)

        first_processing = status_id in processing and not recorder.has_reached(
            ORDER_SUBJECT, order.id, processing
        )
        shortfalls = []
        if first_processing:
            adjustment = InventoryAdjuster(
                policy=command.stock_failure_policy,
                floor=command.stock_floor or 0,
            ).apply_decrement(order)
            shortfalls = adjustment.shortfalls
            CouponLedger().finalize(order.id)

        order.change_status(status_id, actor_id=command.actor_id, terminal_statuses=terminal)

        comment = command.comment if command.comment is not None else status.comment
        notify = command.notify if command.notify is not None else bool(status.notify_customer)
        recorder.record(ORDER_SUBJECT, order.id, status_id, comment, notify, command.actor_id)

        invoice_number = None
        if status_id in completed and command.auto_invoicing and order.invoice_no is None:
            allocated = SequenceAllocator().allocate(command.invoice_prefix)
            order.assign_invoice(allocated.prefix, allocated.number)
            invoice_number = str(allocated)

        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order status transition applied",
            order_id=str(order.id),
            status_id=status_id,
            processing_applied=first_processing,
            invoice_number=invoice_number,
        )
        return {
            "order": order.snapshot(),
            "status_name": status.name,
            "comment": comment,
            "notify": notify,
            "processing_applied": first_processing,
            "invoice_number": invoice_number,
            "stock_shortfalls": shortfalls,
        }
