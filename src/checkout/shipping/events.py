"""Domain events for vendor shipping settings."""

from protean.fields import Float, Identifier, String

from checkout.domain import checkout


@checkout.event(part_of="VendorShippingRate")
class ZoneRateAdded:
    """A vendor priced delivery to a zone."""

    __version__ = "v1"

    rate_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    zone = String(required=True)
    cost = Float(required=True)


@checkout.event(part_of="VendorShippingProfile")
class DefaultShippingCostSet:
    __version__ = "v1"

    vendor_id = Identifier(required=True)
    previous_cost = Float()
    default_shipping_cost = Float(required=True)
