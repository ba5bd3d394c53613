"""Coupon ledger: records, reverses and finalizes coupon redemptions.

There is at most one redemption per order: redeeming again first removes the
previous row.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.coupon.coupon import Coupon
from ordering.coupon.redemption import CouponRedemption
from ordering.exceptions import NotFound, SideEffectFailure

logger = structlog.get_logger(__name__)


class CouponLedger:
    def redeem(self, order_id, customer_id, coupon_code, amount) -> CouponRedemption:
        """Replace the order's redemption with a fresh snapshot of ``coupon_code``."""
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValidationError({"amount": ["Coupon amount must be numeric"]}) from None

        coupon = self.find_coupon(coupon_code)
        reversed_count = self.reverse(order_id)

        redemption = CouponRedemption.for_order(order_id, customer_id, coupon, amount)
        current_domain.repository_for(CouponRedemption).add(redemption)
        logger.info(
            "Coupon redeemed for order",
            order_id=str(order_id),
            code=coupon.code,
            amount=redemption.amount,
            replaced=reversed_count,
        )
        return redemption

    def reverse(self, order_id) -> int:
        """Delete the order's redemption rows. Returns how many were removed."""
        repo = current_domain.repository_for(CouponRedemption)
        existing = self.redemptions_for(order_id)
        for redemption in existing:
            repo._dao.delete(redemption)
        if existing:
            logger.info("Coupon redemption reversed", order_id=str(order_id), count=len(existing))
        return len(existing)

    def finalize(self, order_id) -> CouponRedemption | None:
        """Mark the order's pending redemption as redeemed. No redemption is a no-op."""
        redemption = self.active_redemption(order_id)
        if redemption is None:
            return None
        if redemption.is_redeemed:
            raise SideEffectFailure(
                {"order_id": [f"Coupon {redemption.code} was already finalized for order {order_id}"]}
            )

        redemption.finalize()
        current_domain.repository_for(CouponRedemption).add(redemption)
        logger.info("Coupon redemption finalized", order_id=str(order_id), code=redemption.code)
        return redemption

    def redemptions_for(self, order_id) -> list[CouponRedemption]:
        return (
            current_domain.repository_for(CouponRedemption)
            ._dao.query.filter(order_id=str(order_id))
            .all()
            .items
        )

    def active_redemption(self, order_id) -> CouponRedemption | None:
        redemptions = self.redemptions_for(order_id)
        return redemptions[0] if redemptions else None

    @staticmethod
    def find_coupon(code) -> Coupon:
        coupons = current_domain.repository_for(Coupon)._dao.query.filter(code=code).all().items
        if not coupons:
            raise NotFound({"coupon_code": [f"Coupon {code} does not exist"]})
        return coupons[0]
