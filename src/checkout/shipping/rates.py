"""Vendor shipping settings: zone rates and the vendor's default cost.

Vendors maintain these from their dashboard; the calculator only reads
them. At most one rate exists per (vendor, zone); the command handler
enforces that before a new rate is stored.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from checkout.domain import checkout
from checkout.shipping.events import DefaultShippingCostSet, ZoneRateAdded
from checkout.shipping.zones import is_valid_zone


@checkout.aggregate
class VendorShippingRate:
    vendor_id = Identifier(required=True)
    zone = String(required=True, max_length=50)
    cost = Float(required=True, min_value=0.0)
    created_at = DateTime()

    @invariant.post
    def zone_must_be_a_known_governorate(self):
        if self.zone and not is_valid_zone(self.zone):
            raise ValidationError({"zone": [f"Unknown shipping zone: {self.zone}"]})

    @classmethod
    def create(cls, vendor_id, zone, cost):
        rate = cls(
            vendor_id=vendor_id,
            zone=zone,
            cost=cost,
            created_at=datetime.now(UTC),
        )
        rate.raise_(
            ZoneRateAdded(
                rate_id=str(rate.id),
                vendor_id=str(vendor_id),
                zone=zone,
                cost=cost,
            )
        )
        return rate


@checkout.aggregate
class VendorShippingProfile:
    vendor_id = Identifier(required=True)
    default_shipping_cost = Float(min_value=0.0)
    updated_at = DateTime()

    @classmethod
    def create(cls, vendor_id):
        return cls(vendor_id=vendor_id, updated_at=datetime.now(UTC))

    def set_default_cost(self, cost):
        if cost is None or cost < 0:
            raise ValidationError({"default_shipping_cost": ["Default shipping cost cannot be negative"]})

        previous_cost = self.default_shipping_cost
        self.default_shipping_cost = cost
        self.updated_at = datetime.now(UTC)

        self.raise_(
            DefaultShippingCostSet(
                vendor_id=str(self.vendor_id),
                previous_cost=previous_cost,
                default_shipping_cost=cost,
            )
        )
