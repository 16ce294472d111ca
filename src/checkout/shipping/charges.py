"""Shipping charge results returned to checkout."""

from dataclasses import dataclass, field
from enum import Enum

# Charged when no vendor-specific price information exists, and always for
# platform-owned products.
DEFAULT_SHIPPING_COST = 25.0


class ShippingReason(Enum):
    FREE_PRODUCT = "free_product"
    ZONE_RATE = "zone_rate"
    DEFAULT_RATE = "default_rate"


@dataclass(frozen=True)
class ShippingCharge:
    """What one vendor group costs to ship, and why."""

    vendor_id: str | None
    cost: float
    reason: ShippingReason

    def to_dict(self) -> dict:
        return {"vendor_id": self.vendor_id, "cost": self.cost, "reason": self.reason.value}


@dataclass(frozen=True)
class ShippingResult:
    """Per-vendor breakdown in the order vendors appear in the cart.

    The total is derived from the breakdown, so the two can never disagree.
    """

    breakdown: tuple[ShippingCharge, ...] = field(default_factory=tuple)

    @property
    def total_shipping(self) -> float:
        return sum(charge.cost for charge in self.breakdown)

    def charge_for(self, vendor_id: str | None) -> ShippingCharge | None:
        return next((c for c in self.breakdown if c.vendor_id == vendor_id), None)

    def to_dict(self) -> dict:
        return {
            "total_shipping": self.total_shipping,
            "breakdown": [charge.to_dict() for charge in self.breakdown],
        }
