"""Order workflow engine: the entry point other code calls.

Each operation is sent to its command handler, which Protean runs as one
unit of work. Mail goes out only after a handler has returned, so a mail
failure can never undo an order change; it is logged and reported as
``notified=False``.
"""

import json
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from notifications.dispatcher import NotificationDispatcher
from ordering.coupon.attachment import AttachCoupon
from ordering.exceptions import AllocationConflict
from ordering.gateway import get_gateways
from ordering.mail.mail_data import MailDataBuilder, payment_options
from ordering.order.creation import CreateOrder
from ordering.order.deletion import DeleteOrders
from ordering.order.line_items import AttachLineItems
from ordering.order.totals import AttachTotals
from ordering.settings import OrderEmailRecipient, WorkflowSettings
from ordering.workflow.request import TransitionRequest
from ordering.workflow.transition import TransitionOrderStatus

logger = structlog.get_logger(__name__)

NO_COMMENT = "No comment"


@dataclass
class TransitionResult:
    order: dict
    invoice_number: str | None = None
    processing_applied: bool = False
    stock_shortfalls: list[str] = field(default_factory=list)
    notified: bool | None = None


class OrderWorkflowEngine:
    def __init__(
        self,
        settings: WorkflowSettings,
        dispatcher: NotificationDispatcher | None = None,
        mail_data_builder: MailDataBuilder | None = None,
    ):
        self.settings = settings
        self.dispatcher = dispatcher or NotificationDispatcher(settings.site_email, settings.site_name)
        self.mail_data_builder = mail_data_builder or MailDataBuilder(settings)

    @staticmethod
    def _process(command):
        """Run ``command`` in its own unit of work; a lost version race becomes AllocationConflict."""
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            logger.warning("Concurrent update rejected", command=command.__class__.__name__, error=str(exc))
            raise AllocationConflict(
                {"_entity": [f"{command.__class__.__name__} lost a concurrent update and was rolled back"]}
            ) from exc

    # -------------------------------------------------------------------
    # Order contents
    # -------------------------------------------------------------------
    def create_order(self, **details) -> dict:
        """Create an order without a status; returns ``{"order_id", "hash"}``."""
        return self._process(CreateOrder(**details))

    def attach_line_items(self, order_id, items: list[dict]) -> int:
        return self._process(AttachLineItems(order_id=str(order_id), items=json.dumps(items)))

    def attach_totals(self, order_id, totals: list[dict]) -> int:
        return self._process(AttachTotals(order_id=str(order_id), totals=json.dumps(totals)))

    def attach_coupon(self, order_id, customer_id, coupon: dict) -> str:
        """Redeem ``{"code", "amount"}`` for the order, replacing any earlier redemption."""
        return self._process(
            AttachCoupon(
                order_id=str(order_id),
                customer_id=str(customer_id) if customer_id else None,
                code=coupon.get("code"),
                amount=coupon.get("amount"),
            ),
        )

    def delete_orders(self, order_ids) -> int:
        return self._process(
            DeleteOrders(order_ids=json.dumps([str(order_id) for order_id in order_ids])),
        )

    # -------------------------------------------------------------------
    # Status workflow
    # -------------------------------------------------------------------
    def transition_status(self, order_id, request) -> TransitionResult:
        """Move an order to a new status and apply the side effects that go with it.

        ``request`` is a TransitionRequest or a dict of its fields. Raises
        NotFound, InvalidTransition or a WorkflowError subclass; in every
        such case nothing about the order has changed.
        """
        if not isinstance(request, TransitionRequest):
            request = TransitionRequest.model_validate(request)

        with structlog.contextvars.bound_contextvars(order_id=str(order_id)):
            logger.info("Order status transition started", status_id=request.target_status_id)
            outcome = self._process(TransitionOrderStatus.build(order_id, request, self.settings))

            notified = None
            if outcome["notify"]:
                notified = self.send_status_update(order_id, outcome["status_name"], outcome["comment"])

        return TransitionResult(
            order=outcome["order"],
            invoice_number=outcome["invoice_number"],
            processing_applied=outcome["processing_applied"],
            stock_shortfalls=list(outcome["stock_shortfalls"]),
            notified=notified,
        )

    # -------------------------------------------------------------------
    # Mail
    # -------------------------------------------------------------------
    def send_status_update(self, order_id, status_name, comment=None) -> bool:
        try:
            data = self.mail_data_builder.build(order_id)
        except Exception as exc:
            logger.error("Mail data unavailable", order_id=str(order_id), error=str(exc))
            return False

        data["status_name"] = status_name
        data["status_comment"] = comment if comment else NO_COMMENT
        return self.dispatcher.dispatch("order_update", data.get("email"), data)

    def send_confirmation(self, order_id) -> bool:
        """Mail the new order to the customer, the location and the admin as configured.

        Returns whether the customer mail was sent.
        """
        try:
            data = self.mail_data_builder.build(order_id)
        except Exception as exc:
            logger.error("Mail data unavailable", order_id=str(order_id), error=str(exc))
            return False

        settings = self.settings
        notified = False
        if settings.customer_order_email or settings.wants_order_email(OrderEmailRecipient.CUSTOMER):
            notified = self.dispatcher.dispatch("order", data.get("email"), data)

        if data.get("location_email") and (
            settings.location_order_email or settings.wants_order_email(OrderEmailRecipient.LOCATION)
        ):
            self.dispatcher.dispatch("order_alert", data["location_email"], data)

        if settings.wants_order_email(OrderEmailRecipient.ADMIN):
            self.dispatcher.dispatch("order_alert", settings.site_email, data)

        return notified

    def payment_options(self) -> dict[str, str]:
        return payment_options(get_gateways())
