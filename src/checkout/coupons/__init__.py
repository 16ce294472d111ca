"""Coupon service factory.

Provides get_coupon_service() / set_coupon_service() to swap implementations:
- RepositoryCouponService evaluates coupons stored in the checkout domain
- FakeCouponService for development and testing
"""

import os

from checkout.coupons.port import CouponServicePort

_current_service: CouponServicePort | None = None


def get_coupon_service() -> CouponServicePort:
    """Return the configured coupon service (singleton).

    Set COUPON_SERVICE_ADAPTER=fake to use the scripted service.
    """
    global _current_service
    if _current_service is None:
        adapter = os.environ.get("COUPON_SERVICE_ADAPTER", "repository")
        if adapter == "repository":
            from checkout.coupons.repository_adapter import RepositoryCouponService

            _current_service = RepositoryCouponService()
        elif adapter == "fake":
            from checkout.coupons.fake_adapter import FakeCouponService

            _current_service = FakeCouponService()
        else:
            raise ValueError(f"Unknown coupon service adapter: {adapter}")
    return _current_service


def set_coupon_service(service: CouponServicePort) -> None:
    """Override the active coupon service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_coupon_service() -> None:
    global _current_service
    _current_service = None
