"""Order creation: command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.lookup import hash_in_use
from ordering.order.order import Order, OrderType

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier()
    address_id = Identifier()
    location_id = Identifier()
    order_type = String(choices=OrderType, default=OrderType.DELIVERY.value)
    payment = String(max_length=100)
    comment = Text()
    order_date_time = DateTime()
    # Client metadata, captured by the caller from the originating request
    ip_address = String(max_length=45)
    user_agent = String(max_length=500)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order_hash = Order.new_hash()
        while hash_in_use(order_hash):
            order_hash = Order.new_hash()

        order = Order.place(
            hash=order_hash,
            order_type=command.order_type,
            customer_id=command.customer_id,
            address_id=command.address_id,
            location_id=command.location_id,
            payment=command.payment,
            comment=command.comment,
            order_date_time=command.order_date_time,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("Order placed", order_id=str(order.id), order_type=order.order_type)
        return {"order_id": str(order.id), "hash": order.hash}
