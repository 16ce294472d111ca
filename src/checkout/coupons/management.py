"""Coupon management: commands and handler.

Administrators define and retire coupons; order placement redeems them.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from checkout.coupons.coupon import Coupon, normalize_code
from checkout.domain import checkout

logger = structlog.get_logger(__name__)


@checkout.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    discount_type = String(required=True)
    discount_value = Float(required=True, min_value=0.0)
    description = String(max_length=255)
    min_subtotal = Float(min_value=0.0)
    max_discount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    starts_at = DateTime()
    ends_at = DateTime()
    product_ids = Text()  # JSON array of product ids
    vendor_ids = Text()  # JSON array of vendor ids


@checkout.command(part_of="Coupon")
class DeactivateCoupon:
    coupon_id = Identifier(required=True)


@checkout.command(part_of="Coupon")
class RedeemCoupon:
    """Record that a placed order used the coupon."""

    coupon_id = Identifier(required=True)


def find_coupon_by_code(code):
    results = current_domain.repository_for(Coupon)._dao.query.filter(code=normalize_code(code)).all()
    return results.items[0] if results.items else None


@checkout.command_handler(part_of=Coupon)
class ManageCouponsHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        if find_coupon_by_code(command.code) is not None:
            raise ValidationError({"code": ["A coupon with this code already exists"]})

        coupon = Coupon.create(
            code=command.code,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            description=command.description,
            min_subtotal=command.min_subtotal,
            max_discount=command.max_discount,
            usage_limit=command.usage_limit,
            starts_at=command.starts_at,
            ends_at=command.ends_at,
            product_ids=json.loads(command.product_ids) if command.product_ids else None,
            vendor_ids=json.loads(command.vendor_ids) if command.vendor_ids else None,
        )
        current_domain.repository_for(Coupon).add(coupon)
        logger.info("Coupon created", code=coupon.code, discount_type=coupon.discount_type)
        return str(coupon.id)

    @handle(DeactivateCoupon)
    def deactivate_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        coupon.deactivate()
        repo.add(coupon)

    @handle(RedeemCoupon)
    def redeem_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        coupon.redeem()
        repo.add(coupon)
