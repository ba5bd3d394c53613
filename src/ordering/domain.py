"""Ordering bounded context: order fulfillment workflow for a food-ordering platform.

Holds every aggregate that takes part in a status transition (orders,
statuses, status history, coupons and their redemptions, menu stock and
invoice sequences) so that a transition and all of its side effects commit
or roll back together in one unit of work.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
