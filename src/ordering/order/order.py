"""Order aggregate (CQRS): the root of an order's fulfillment lifecycle.

An order is placed without a status ("placed but unconfirmed"). Each status
transition is applied by the workflow engine, which also owns the side
effects; the aggregate itself guards the rules that only need the order:

    - the hash is generated once, at placement, and never changes
    - the invoice number is assigned at most once
    - no transition leaves a terminal status

Line items, their selected options and the totals are owned by the order and
go away with it.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from ordering.domain import ordering
from ordering.exceptions import DuplicateEffect, InvalidTransition
from ordering.order.events import (
    InvoiceNumberAssigned,
    LineItemsAttached,
    OrderPlaced,
    OrderStatusChanged,
    TotalsAttached,
)


class OrderType(Enum):
    DELIVERY = "delivery"
    COLLECTION = "collection"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLineItem:
    """A menu item as it was ordered: price and quantity are frozen at checkout."""

    menu_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)
    comment = String(max_length=1000)


@ordering.entity(part_of="Order")
class OrderLineItemOption:
    """One selected option value of a line item (e.g. "Extra cheese")."""

    line_item_id = Identifier(required=True)
    menu_id = Identifier(required=True)
    menu_option_id = Identifier()
    option_value_id = Identifier()
    name = String(required=True, max_length=255)
    price = Float(default=0.0)


@ordering.entity(part_of="Order")
class OrderTotal:
    """A total row (subtotal, delivery, coupon, tax, total...) shown in priority order."""

    code = String(required=True, max_length=50)
    title = String(required=True, max_length=255)
    value = Float(required=True)
    priority = Integer(default=0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier()
    address_id = Identifier()
    location_id = Identifier()
    order_type = String(choices=OrderType, default=OrderType.DELIVERY.value)
    payment = String(max_length=100)
    comment = Text()
    order_date_time = DateTime()

    line_items = HasMany(OrderLineItem)
    line_item_options = HasMany(OrderLineItemOption)
    totals = HasMany(OrderTotal)
    total_items = Integer(default=0)
    order_total = Float(default=0.0)

    status_id = Identifier()
    invoice_prefix = String(max_length=100)
    invoice_no = Integer()
    invoice_date = DateTime()

    hash = String(required=True, max_length=40, unique=True)
    ip_address = String(max_length=45)
    user_agent = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @staticmethod
    def new_hash() -> str:
        return uuid4().hex

    @classmethod
    def place(
        cls,
        hash,
        order_type=OrderType.DELIVERY.value,
        customer_id=None,
        address_id=None,
        location_id=None,
        payment=None,
        comment=None,
        order_date_time=None,
        ip_address=None,
        user_agent=None,
    ):
        """Create an order without a status. The caller guarantees ``hash`` is unused."""
        now = datetime.now(UTC)
        order = cls(
            hash=hash,
            order_type=order_type,
            customer_id=customer_id,
            address_id=address_id,
            location_id=location_id,
            payment=payment,
            comment=comment,
            order_date_time=order_date_time or now,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id) if customer_id else None,
                location_id=str(location_id) if location_id else None,
                order_type=order.order_type,
                hash=hash,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def is_placed(self) -> bool:
        """An order counts as placed once it has received its first status."""
        return self.status_id is not None

    @property
    def is_delivery_type(self) -> bool:
        return self.order_type == OrderType.DELIVERY.value

    @property
    def is_collection_type(self) -> bool:
        return self.order_type == OrderType.COLLECTION.value

    @property
    def order_type_name(self) -> str:
        return self.order_type.title()

    @property
    def invoice_number(self) -> str | None:
        if self.invoice_no is None:
            return None
        return f"{self.invoice_prefix or ''}{self.invoice_no}"

    def sorted_totals(self) -> list[OrderTotal]:
        return sorted(self.totals, key=lambda total: total.priority)

    def options_for(self, line_item_id) -> list[OrderLineItemOption]:
        return [o for o in self.line_item_options if str(o.line_item_id) == str(line_item_id)]

    # -------------------------------------------------------------------
    # Cart contents
    # -------------------------------------------------------------------
    def attach_line_items(self, items_data):
        """Replace the line items (and their options) with a cart snapshot.

        Each item is a dict with ``menu_id``, ``name``, ``quantity``, ``price``
        and optionally ``subtotal``, ``comment`` and ``options``; an option is
        ``{"menu_option_id", "values": [{"option_value_id", "name", "price"}]}``.
        """
        for option in list(self.line_item_options):
            self.remove_line_item_options(option)
        for item in list(self.line_items):
            self.remove_line_items(item)

        total_items = 0
        for item_data in items_data:
            if not item_data.get("menu_id"):
                raise ValidationError({"menu_id": ["Every line item must reference a menu"]})

            quantity = int(item_data.get("quantity", 1))
            price = float(item_data.get("price", 0.0))
            subtotal = item_data.get("subtotal")
            line_item = OrderLineItem(
                menu_id=str(item_data["menu_id"]),
                name=item_data.get("name") or str(item_data["menu_id"]),
                quantity=quantity,
                price=price,
                subtotal=float(subtotal) if subtotal is not None else round(price * quantity, 2),
                comment=item_data.get("comment"),
            )
            self.add_line_items(line_item)
            total_items += quantity

            for option in item_data.get("options") or []:
                for value in option.get("values") or []:
                    self.add_line_item_options(
                        OrderLineItemOption(
                            line_item_id=str(line_item.id),
                            menu_id=str(item_data["menu_id"]),
                            menu_option_id=option.get("menu_option_id"),
                            option_value_id=value.get("option_value_id"),
                            name=value["name"],
                            price=float(value.get("price", 0.0)),
                        )
                    )

        self.total_items = total_items
        self.updated_at = datetime.now(UTC)
        self.raise_(
            LineItemsAttached(
                order_id=str(self.id),
                line_item_count=len(self.line_items),
                total_items=total_items,
            )
        )

    def attach_totals(self, totals_data):
        """Replace the totals. The row with code ``total`` becomes ``order_total``."""
        for total in list(self.totals):
            self.remove_totals(total)

        for total_data in totals_data:
            total = OrderTotal(
                code=total_data["code"],
                title=total_data.get("title") or total_data.get("label") or total_data["code"],
                value=float(total_data["value"]),
                priority=int(total_data.get("priority", 0)),
            )
            self.add_totals(total)
            if total.code == "total":
                self.order_total = total.value

        self.updated_at = datetime.now(UTC)
        self.raise_(
            TotalsAttached(
                order_id=str(self.id),
                total_count=len(self.totals),
                order_total=self.order_total,
            )
        )

    # -------------------------------------------------------------------
    # Status and invoicing
    # -------------------------------------------------------------------
    def assert_can_transition(self, status_id, terminal_statuses=()):
        """Raise InvalidTransition when the current status is one of ``terminal_statuses``."""
        if self.status_id is not None and str(self.status_id) in {str(s) for s in terminal_statuses}:
            raise InvalidTransition(
                {"status_id": [f"Order is in terminal status {self.status_id} and cannot move to {status_id}"]}
            )

    def change_status(self, status_id, actor_id=None, terminal_statuses=()):
        """Move the order to ``status_id``."""
        self.assert_can_transition(status_id, terminal_statuses)

        previous = self.status_id
        now = datetime.now(UTC)
        self.status_id = str(status_id)
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status_id=str(previous) if previous is not None else None,
                status_id=str(status_id),
                actor_id=str(actor_id) if actor_id else None,
                changed_at=now,
            )
        )

    def assign_invoice(self, prefix, number):
        if self.invoice_no is not None:
            raise DuplicateEffect({"invoice_no": [f"Order already has invoice number {self.invoice_number}"]})

        now = datetime.now(UTC)
        self.invoice_prefix = prefix
        self.invoice_no = number
        self.invoice_date = now
        self.updated_at = now
        self.raise_(
            InvoiceNumberAssigned(
                order_id=str(self.id),
                invoice_prefix=prefix,
                invoice_no=number,
                invoice_number=self.invoice_number,
                assigned_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Read model
    # -------------------------------------------------------------------
    def snapshot(self) -> dict:
        """Plain-dict view of the order, as returned to workflow callers."""
        return {
            "order_id": str(self.id),
            "hash": self.hash,
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "address_id": str(self.address_id) if self.address_id else None,
            "location_id": str(self.location_id) if self.location_id else None,
            "order_type": self.order_type,
            "payment": self.payment,
            "status_id": str(self.status_id) if self.status_id is not None else None,
            "invoice_prefix": self.invoice_prefix,
            "invoice_no": self.invoice_no,
            "invoice_number": self.invoice_number,
            "total_items": self.total_items,
            "order_total": self.order_total,
            "line_items": [
                {
                    "line_item_id": str(item.id),
                    "menu_id": str(item.menu_id),
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": item.price,
                    "subtotal": item.subtotal,
                    "comment": item.comment,
                    "options": [
                        {"name": option.name, "price": option.price} for option in self.options_for(item.id)
                    ],
                }
                for item in self.line_items
            ],
            "totals": [
                {"code": t.code, "title": t.title, "value": t.value, "priority": t.priority}
                for t in self.sorted_totals()
            ],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
