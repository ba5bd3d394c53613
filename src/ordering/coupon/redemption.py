"""CouponRedemption aggregate: a coupon used against one order.

Code and minimum total are copied from the coupon when the redemption is
written, so the record stays readable after the coupon is edited or deleted.
The amount is stored as a negative value (a discount). A redemption starts as
Pending when the coupon is attached at checkout and becomes Redeemed once the
order first reaches a processing status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering
from ordering.exceptions import DuplicateEffect


class RedemptionStatus(Enum):
    PENDING = "Pending"
    REDEEMED = "Redeemed"


@ordering.aggregate
class CouponRedemption:
    order_id = Identifier(required=True)
    customer_id = Identifier()
    coupon_id = Identifier(required=True)
    code = String(required=True, max_length=50)
    amount = Float(required=True)
    min_total = Float(default=0.0)
    status = String(choices=RedemptionStatus, default=RedemptionStatus.PENDING.value)
    created_at = DateTime()
    redeemed_at = DateTime()

    @classmethod
    def for_order(cls, order_id, customer_id, coupon, amount):
        """Snapshot ``coupon`` against ``order_id``. ``amount`` is the positive discount."""
        amount = float(amount)
        if amount < 0:
            raise ValidationError({"amount": ["Coupon amount must be given as a positive discount"]})

        return cls(
            order_id=str(order_id),
            customer_id=str(customer_id) if customer_id else None,
            coupon_id=str(coupon.id),
            code=coupon.code,
            amount=-amount,
            min_total=coupon.min_total or 0.0,
            created_at=datetime.now(UTC),
        )

    @property
    def is_redeemed(self) -> bool:
        return self.status == RedemptionStatus.REDEEMED.value

    def finalize(self):
        if self.is_redeemed:
            raise DuplicateEffect({"order_id": [f"Coupon {self.code} is already redeemed for this order"]})
        self.status = RedemptionStatus.REDEEMED.value
        self.redeemed_at = datetime.now(UTC)
