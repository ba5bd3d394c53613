"""Domain events for the Order aggregate.

Events record what happened to an order; they are raised inside the unit of
work and published when it commits.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was created and received its hash."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier()
    location_id = Identifier()
    order_type = String(required=True)
    hash = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class LineItemsAttached:
    """The order's line items were (re)written from a cart snapshot."""

    __version__ = 1

    order_id = Identifier(required=True)
    line_item_count = Integer(required=True)
    total_items = Integer(required=True)


@ordering.event(part_of="Order")
class TotalsAttached:
    """The order's totals were (re)written."""

    __version__ = 1

    order_id = Identifier(required=True)
    total_count = Integer(required=True)
    order_total = Float()


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status_id = Identifier()
    status_id = Identifier(required=True)
    actor_id = Identifier()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class InvoiceNumberAssigned:
    """The order received its invoice number. Happens at most once per order."""

    __version__ = 1

    order_id = Identifier(required=True)
    invoice_prefix = String(required=True)
    invoice_no = Integer(required=True)
    invoice_number = String(required=True)
    assigned_at = DateTime(required=True)
