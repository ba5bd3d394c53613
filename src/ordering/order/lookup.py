"""Lookups shared by the order command handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.exceptions import NotFound
from ordering.order.order import Order
from ordering.status.status import Status


def get_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound({"order_id": [f"Order {order_id} does not exist"]}) from None


def get_status(status_id) -> Status:
    try:
        return current_domain.repository_for(Status).get(str(status_id))
    except ObjectNotFoundError:
        raise NotFound({"status_id": [f"Status {status_id} does not exist"]}) from None


def hash_in_use(hash_value: str) -> bool:
    return bool(current_domain.repository_for(Order)._dao.query.filter(hash=hash_value).all().items)
