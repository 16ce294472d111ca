"""Domain events for the CheckoutSession aggregate."""

from protean.fields import Float, Identifier, String

from checkout.domain import checkout


@checkout.event(part_of="CheckoutSession")
class CouponAccepted:
    """A coupon was validated and its discount applied to the session."""

    __version__ = "v1"

    session_id = Identifier(required=True)
    coupon_code = String(required=True)
    coupon_id = Identifier()
    discount = Float(required=True)


@checkout.event(part_of="CheckoutSession")
class CouponRejected:
    __version__ = "v1"

    session_id = Identifier(required=True)
    coupon_code = String()
    reason = String(required=True)


@checkout.event(part_of="CheckoutSession")
class CouponRemoved:
    """The customer removed the applied coupon; the subtotal is undiscounted again."""

    __version__ = "v1"

    session_id = Identifier(required=True)
    coupon_code = String(required=True)


@checkout.event(part_of="CheckoutSession")
class ShippingQuoted:
    __version__ = "v1"

    session_id = Identifier(required=True)
    zone = String(required=True)
    shipping_total = Float(required=True)
