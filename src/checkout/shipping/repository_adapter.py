"""Shipping rates read from the vendor settings stored in the checkout domain."""

from checkout.shipping.port import ShippingProfile, ShippingRatesPort, ZoneRate
from checkout.shipping.settings import find_shipping_profile, find_zone_rate


class RepositoryShippingRates(ShippingRatesPort):
    """Serves lookups from the VendorShippingRate / VendorShippingProfile repositories.

    Must be used inside an active checkout domain context.
    """

    async def get_shipping_rate(self, vendor_id: str, zone: str) -> ZoneRate | None:
        rate = find_zone_rate(vendor_id, zone)
        if rate is None:
            return None
        return ZoneRate(vendor_id=str(rate.vendor_id), zone=rate.zone, cost=rate.cost)

    async def get_vendor_shipping_profile(self, vendor_id: str) -> ShippingProfile | None:
        profile = find_shipping_profile(vendor_id)
        if profile is None:
            return None
        return ShippingProfile(vendor_id=str(profile.vendor_id), default_shipping_cost=profile.default_shipping_cost)
