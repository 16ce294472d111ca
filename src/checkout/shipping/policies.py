"""Shipping policy chain.

Each policy either prices a vendor group or declines (returns None) so the
next one is tried. The first policy to answer wins:

    1. FreeProductPolicy    any free-shipping item zeroes the whole group
    2. PlatformDefaultPolicy platform products always pay the default rate
    3. ZoneRatePolicy       the vendor's rate for the destination zone
    4. VendorDefaultPolicy  the vendor's own default shipping cost
    5. FallbackRatePolicy   the platform default rate
"""

from abc import ABC, abstractmethod

from checkout.cart.line_items import CartGroup, PlatformGroup
from checkout.shipping.charges import DEFAULT_SHIPPING_COST, ShippingCharge, ShippingReason
from checkout.shipping.port import ShippingRatesPort


class ShippingPolicy(ABC):
    """One tier of the shipping price decision."""

    @abstractmethod
    async def charge_for(self, group: CartGroup, zone: str, rates: ShippingRatesPort) -> ShippingCharge | None: ...


class FreeProductPolicy(ShippingPolicy):
    async def charge_for(self, group, zone, rates):
        if group.has_free_shipping:
            return ShippingCharge(vendor_id=group.vendor_id, cost=0.0, reason=ShippingReason.FREE_PRODUCT)
        return None


class PlatformDefaultPolicy(ShippingPolicy):
    """Platform products never consult vendor rate tables."""

    async def charge_for(self, group, zone, rates):
        if isinstance(group, PlatformGroup):
            return ShippingCharge(vendor_id=None, cost=DEFAULT_SHIPPING_COST, reason=ShippingReason.DEFAULT_RATE)
        return None


class ZoneRatePolicy(ShippingPolicy):
    async def charge_for(self, group, zone, rates):
        rate = await rates.get_shipping_rate(group.vendor_id, zone)
        if rate is None:
            return None
        # A zero rate is still a zone rate, not a free product
        return ShippingCharge(vendor_id=group.vendor_id, cost=rate.cost, reason=ShippingReason.ZONE_RATE)


class VendorDefaultPolicy(ShippingPolicy):
    async def charge_for(self, group, zone, rates):
        profile = await rates.get_vendor_shipping_profile(group.vendor_id)
        if profile is None or profile.default_shipping_cost is None:
            return None
        return ShippingCharge(
            vendor_id=group.vendor_id,
            cost=profile.default_shipping_cost,
            reason=ShippingReason.DEFAULT_RATE,
        )


class FallbackRatePolicy(ShippingPolicy):
    async def charge_for(self, group, zone, rates):
        return ShippingCharge(vendor_id=group.vendor_id, cost=DEFAULT_SHIPPING_COST, reason=ShippingReason.DEFAULT_RATE)


DEFAULT_POLICIES: tuple[ShippingPolicy, ...] = (
    FreeProductPolicy(),
    PlatformDefaultPolicy(),
    ZoneRatePolicy(),
    VendorDefaultPolicy(),
    FallbackRatePolicy(),
)
