"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Coupon")
class CouponCreated:
    """A coupon was defined by an administrator."""

    __version__ = "v1"

    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount_type = String(required=True)
    discount_value = Float(required=True)


@checkout.event(part_of="Coupon")
class CouponRedeemed:
    """A coupon was used on a placed order."""

    __version__ = "v1"

    coupon_id = Identifier(required=True)
    code = String(required=True)
    used_count = Integer(required=True)
    redeemed_at = DateTime(required=True)


@checkout.event(part_of="Coupon")
class CouponDeactivated:
    __version__ = "v1"

    coupon_id = Identifier(required=True)
    code = String(required=True)
    deactivated_at = DateTime(required=True)
