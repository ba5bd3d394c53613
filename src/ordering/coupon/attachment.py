"""Coupon attachment: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, String

from ordering.coupon.ledger import CouponLedger
from ordering.coupon.redemption import CouponRedemption
from ordering.domain import ordering
from ordering.order.lookup import get_order


@ordering.command(part_of="CouponRedemption")
class AttachCoupon:
    """Record the coupon used at checkout against an order."""

    order_id = Identifier(required=True)
    customer_id = Identifier()
    code = String(required=True, max_length=50)
    amount = Float(required=True)


@ordering.command_handler(part_of=CouponRedemption)
class CouponAttachmentHandler:
    @handle(AttachCoupon)
    def attach_coupon(self, command):
        order = get_order(command.order_id)
        redemption = CouponLedger().redeem(
            order_id=order.id,
            customer_id=command.customer_id or order.customer_id,
            coupon_code=command.code,
            amount=command.amount,
        )
        return str(redemption.id)
