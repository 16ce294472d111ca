"""Configurable fake coupon service for development and testing.

Coupons are registered up front with the discount they should yield, or
with the reason they should be rejected. Every call is recorded so tests
can assert whether the service was consulted at all.
"""

from uuid import uuid4

from checkout.coupons.port import CouponRecord, CouponServiceError, CouponServicePort, RemoteCouponResult


class FakeCouponService(CouponServicePort):
    """Scripted coupon service."""

    def __init__(self) -> None:
        self.accepted: dict[str, tuple[CouponRecord, float]] = {}
        self.rejected: dict[str, str] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Coupon service unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Coupon service unavailable") -> None:
        """Configure service behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def add_coupon(
        self,
        code: str,
        discount: float,
        discount_type: str = "Fixed",
        discount_value: float | None = None,
    ) -> CouponRecord:
        record = CouponRecord(
            id=f"coupon-{uuid4().hex[:8]}",
            code=code.upper(),
            discount_type=discount_type,
            discount_value=discount if discount_value is None else discount_value,
        )
        self.accepted[record.code] = (record, discount)
        return record

    def reject_coupon(self, code: str, reason: str) -> None:
        self.rejected[code.upper()] = reason

    async def apply_coupon(self, code: str, cart_items: list, subtotal: float) -> RemoteCouponResult:
        self.calls.append(
            {
                "method": "apply_coupon",
                "code": code,
                "item_count": len(cart_items),
                "subtotal": subtotal,
            }
        )
        if not self.should_succeed:
            raise CouponServiceError(self.failure_reason)

        key = code.upper()
        if key in self.accepted:
            record, discount = self.accepted[key]
            return RemoteCouponResult(coupon=record, discount=discount)
        if key in self.rejected:
            return RemoteCouponResult(error_reason=self.rejected[key])
        return RemoteCouponResult(error_reason="Invalid coupon code")
