"""Coupon aggregate: the live coupon catalogue entry.

Only read by the ledger, to take a snapshot of the code and minimum total at
the moment a coupon is redeemed against an order.
"""

from protean.fields import Float, String

from ordering.domain import ordering


@ordering.aggregate
class Coupon:
    code = String(required=True, max_length=50, unique=True)
    name = String(max_length=255)
    discount = Float(default=0.0)
    min_total = Float(default=0.0)
