"""Coupon applier: validates a code against the cart through the coupon service.

Empty codes are rejected locally and never reach the service. Everything
else is delegated; rejections and service failures both come back as a
message the customer can act on, never as an exception.
"""

from dataclasses import dataclass

import structlog

from checkout.coupons import get_coupon_service
from checkout.coupons.coupon import INVALID_COUPON, normalize_code
from checkout.coupons.port import CouponRecord, CouponServicePort

logger = structlog.get_logger(__name__)

ENTER_COUPON_CODE = "Please enter a coupon code"
COUPON_VERIFICATION_ERROR = "Error verifying coupon code"


@dataclass(frozen=True)
class CouponApplicationResult:
    ok: bool
    coupon: CouponRecord | None = None
    discount: float | None = None
    message: str | None = None

    @classmethod
    def applied(cls, coupon, discount):
        return cls(ok=True, coupon=coupon, discount=discount)

    @classmethod
    def failed(cls, message):
        return cls(ok=False, message=message)


class CouponApplier:
    def __init__(self, service: CouponServicePort | None = None) -> None:
        self.service = service if service is not None else get_coupon_service()

    async def apply(self, code: str, cart_items: list, subtotal: float) -> CouponApplicationResult:
        normalized = normalize_code(code)
        if not normalized:
            return CouponApplicationResult.failed(ENTER_COUPON_CODE)

        try:
            remote = await self.service.apply_coupon(normalized, cart_items, subtotal)
        except Exception as exc:
            # Any service failure is recoverable: the customer may retry
            logger.warning("Coupon verification failed", code=normalized, error=str(exc))
            return CouponApplicationResult.failed(COUPON_VERIFICATION_ERROR)

        if remote.ok and remote.discount < 0:
            logger.warning("Coupon service returned a negative discount", code=remote.coupon.code, discount=remote.discount)
            return CouponApplicationResult.failed(INVALID_COUPON)
        if remote.ok:
            logger.info("Coupon applied", code=remote.coupon.code, discount=remote.discount)
            return CouponApplicationResult.applied(remote.coupon, remote.discount)
        return CouponApplicationResult.failed(remote.error_reason or INVALID_COUPON)


async def apply_coupon(
    code: str,
    cart_items: list,
    subtotal: float,
    service: CouponServicePort | None = None,
) -> CouponApplicationResult:
    """Validate ``code`` for this cart and return the flat discount it yields."""
    return await CouponApplier(service).apply(code, cart_items, subtotal)
