"""In-memory shipping rates: deterministic rate source for testing and development.

Records every lookup so tests can assert which tiers of the policy chain
were consulted. Can be switched to fail every lookup to simulate an
unreachable rate store.
"""

from checkout.shipping.port import ShippingLookupError, ShippingProfile, ShippingRatesPort, ZoneRate


class InMemoryShippingRates(ShippingRatesPort):
    """Rate source backed by plain dictionaries."""

    def __init__(self) -> None:
        self.rates: dict[tuple[str, str], float] = {}
        self.profiles: dict[str, float | None] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Rate store unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Rate store unavailable") -> None:
        """Configure lookup behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def set_rate(self, vendor_id: str, zone: str, cost: float) -> None:
        # One rate per (vendor, zone): later calls replace earlier ones
        self.rates[(vendor_id, zone)] = cost

    def set_profile(self, vendor_id: str, default_shipping_cost: float | None = None) -> None:
        self.profiles[vendor_id] = default_shipping_cost

    async def get_shipping_rate(self, vendor_id: str, zone: str) -> ZoneRate | None:
        self.calls.append({"method": "get_shipping_rate", "vendor_id": vendor_id, "zone": zone})
        if not self.should_succeed:
            raise ShippingLookupError(self.failure_reason)

        cost = self.rates.get((vendor_id, zone))
        if cost is None:
            return None
        return ZoneRate(vendor_id=vendor_id, zone=zone, cost=cost)

    async def get_vendor_shipping_profile(self, vendor_id: str) -> ShippingProfile | None:
        self.calls.append({"method": "get_vendor_shipping_profile", "vendor_id": vendor_id})
        if not self.should_succeed:
            raise ShippingLookupError(self.failure_reason)

        if vendor_id not in self.profiles:
            return None
        return ShippingProfile(vendor_id=vendor_id, default_shipping_cost=self.profiles[vendor_id])
