"""Coupon service port (abstract interface).

The coupon service owns matching and eligibility: expiry, usage caps,
minimum order and product/vendor scope. It answers with either the matched
coupon and a flat discount amount (percentages already converted), or a
reason the coupon cannot be used.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CouponRecord:
    """The coupon as shown back to the customer once it matched."""

    id: str
    code: str
    discount_type: str
    discount_value: float
    description: str | None = None


@dataclass(frozen=True)
class RemoteCouponResult:
    """Outcome of a coupon service call."""

    coupon: CouponRecord | None = None
    discount: float | None = None
    error_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.coupon is not None and self.discount is not None and self.error_reason is None


class CouponServiceError(Exception):
    """The coupon service could not be reached or failed unexpectedly."""


class CouponServicePort(ABC):
    """Abstract coupon service interface."""

    @abstractmethod
    async def apply_coupon(self, code: str, cart_items: list, subtotal: float) -> RemoteCouponResult:
        """Match ``code`` against the cart and compute its discount."""
        ...
