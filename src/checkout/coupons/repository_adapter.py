"""Coupon service that evaluates coupons stored in the checkout domain."""

import structlog

from checkout.coupons.coupon import INVALID_COUPON
from checkout.coupons.management import find_coupon_by_code
from checkout.coupons.port import CouponRecord, CouponServicePort, RemoteCouponResult

logger = structlog.get_logger(__name__)


class RepositoryCouponService(CouponServicePort):
    """Must be used inside an active checkout domain context."""

    async def apply_coupon(self, code: str, cart_items: list, subtotal: float) -> RemoteCouponResult:
        coupon = find_coupon_by_code(code)
        if coupon is None:
            return RemoteCouponResult(error_reason=INVALID_COUPON)

        reason = coupon.eligibility_error(cart_items, subtotal)
        if reason is not None:
            logger.info("Coupon rejected", code=coupon.code, reason=reason)
            return RemoteCouponResult(error_reason=reason)

        record = CouponRecord(
            id=str(coupon.id),
            code=coupon.code,
            discount_type=coupon.discount_type,
            discount_value=coupon.discount_value,
            description=coupon.description,
        )
        return RemoteCouponResult(coupon=record, discount=coupon.discount_for(cart_items, subtotal))
