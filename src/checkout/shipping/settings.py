"""Vendor shipping settings: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.shipping.rates import VendorShippingProfile, VendorShippingRate

logger = structlog.get_logger(__name__)


@checkout.command(part_of="VendorShippingRate")
class AddZoneRate:
    """Price delivery to one governorate for a vendor."""

    vendor_id = Identifier(required=True)
    zone = String(required=True, max_length=50)
    cost = Float(required=True, min_value=0.0)


@checkout.command(part_of="VendorShippingRate")
class RemoveZoneRate:
    rate_id = Identifier(required=True)


@checkout.command(part_of="VendorShippingProfile")
class SetDefaultShippingCost:
    """Set the cost charged to zones the vendor has not priced."""

    vendor_id = Identifier(required=True)
    default_shipping_cost = Float(required=True, min_value=0.0)


def find_zone_rate(vendor_id, zone):
    """Return the stored rate for (vendor, zone), or None."""
    results = (
        current_domain.repository_for(VendorShippingRate)
        ._dao.query.filter(vendor_id=str(vendor_id), zone=zone)
        .all()
    )
    return results.items[0] if results.items else None


def find_shipping_profile(vendor_id):
    results = current_domain.repository_for(VendorShippingProfile)._dao.query.filter(vendor_id=str(vendor_id)).all()
    return results.items[0] if results.items else None


@checkout.command_handler(part_of=VendorShippingRate)
class ManageZoneRatesHandler:
    @handle(AddZoneRate)
    def add_zone_rate(self, command):
        if find_zone_rate(command.vendor_id, command.zone) is not None:
            raise ValidationError({"zone": ["A shipping rate for this zone already exists"]})

        rate = VendorShippingRate.create(
            vendor_id=command.vendor_id,
            zone=command.zone,
            cost=command.cost,
        )
        current_domain.repository_for(VendorShippingRate).add(rate)
        logger.info("Zone rate added", vendor_id=str(command.vendor_id), zone=command.zone, cost=command.cost)
        return str(rate.id)

    @handle(RemoveZoneRate)
    def remove_zone_rate(self, command):
        repo = current_domain.repository_for(VendorShippingRate)
        rate = repo.get(command.rate_id)
        repo._dao.delete(rate)
        logger.info("Zone rate removed", vendor_id=str(rate.vendor_id), zone=rate.zone)


@checkout.command_handler(part_of=VendorShippingProfile)
class ManageShippingProfileHandler:
    @handle(SetDefaultShippingCost)
    def set_default_shipping_cost(self, command):
        profile = find_shipping_profile(command.vendor_id) or VendorShippingProfile.create(command.vendor_id)
        profile.set_default_cost(command.default_shipping_cost)
        current_domain.repository_for(VendorShippingProfile).add(profile)
        return str(profile.id)
