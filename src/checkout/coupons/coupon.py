"""Coupon aggregate: discount codes and the rules that make them usable.

A coupon is either a percentage of the eligible amount or a fixed amount.
When it is scoped to products and/or vendors, only matching cart lines
count towards the eligible amount; otherwise the whole subtotal does. The
discount never exceeds the eligible amount or the coupon's own cap.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from checkout.coupons.events import CouponCreated, CouponDeactivated, CouponRedeemed
from checkout.domain import checkout

INVALID_COUPON = "Invalid coupon code"
COUPON_INACTIVE = "This coupon is no longer active"
COUPON_NOT_STARTED = "This coupon is not active yet"
COUPON_EXPIRED = "This coupon has expired"
COUPON_EXHAUSTED = "This coupon has reached its usage limit"
COUPON_OUT_OF_SCOPE = "This coupon does not apply to the items in your cart"


class DiscountType(Enum):
    PERCENTAGE = "Percentage"
    FIXED = "Fixed"


def normalize_code(code):
    return (code or "").strip().upper()


def _as_utc(value):
    # Memory and SQL providers hand back naive datetimes
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


@checkout.aggregate
class Coupon:
    code = String(required=True, max_length=50)
    description = String(max_length=255)
    discount_type = String(choices=DiscountType, default=DiscountType.PERCENTAGE.value)
    discount_value = Float(required=True, min_value=0.0)
    min_subtotal = Float(min_value=0.0)
    max_discount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    used_count = Integer(default=0)
    starts_at = DateTime()
    ends_at = DateTime()
    is_active = Boolean(default=True)
    product_ids = Text()  # JSON array; empty means any product
    vendor_ids = Text()  # JSON array; empty means any vendor
    created_at = DateTime()

    @invariant.post
    def percentage_cannot_exceed_one_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and (self.discount_value or 0) > 100:
            raise ValidationError({"discount_value": ["Percentage discounts cannot exceed 100"]})

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.starts_at and self.ends_at and _as_utc(self.ends_at) <= _as_utc(self.starts_at):
            raise ValidationError({"ends_at": ["Coupon must end after it starts"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        code,
        discount_type,
        discount_value,
        description=None,
        min_subtotal=None,
        max_discount=None,
        usage_limit=None,
        starts_at=None,
        ends_at=None,
        product_ids=None,
        vendor_ids=None,
    ):
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError({"code": ["Coupon code is required"]})

        coupon = cls(
            code=normalized,
            description=description,
            discount_type=discount_type,
            discount_value=discount_value,
            min_subtotal=min_subtotal,
            max_discount=max_discount,
            usage_limit=usage_limit,
            used_count=0,
            starts_at=starts_at,
            ends_at=ends_at,
            is_active=True,
            product_ids=json.dumps(list(product_ids or [])),
            vendor_ids=json.dumps(list(vendor_ids or [])),
            created_at=datetime.now(UTC),
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=normalized,
                discount_type=coupon.discount_type,
                discount_value=discount_value,
            )
        )
        return coupon

    # -------------------------------------------------------------------
    # Eligibility
    # -------------------------------------------------------------------
    @property
    def scoped_product_ids(self):
        return set(json.loads(self.product_ids)) if self.product_ids else set()

    @property
    def scoped_vendor_ids(self):
        return set(json.loads(self.vendor_ids)) if self.vendor_ids else set()

    @property
    def is_scoped(self):
        return bool(self.scoped_product_ids or self.scoped_vendor_ids)

    def eligible_items(self, cart_items):
        if not self.is_scoped:
            return list(cart_items)
        products = self.scoped_product_ids
        vendors = self.scoped_vendor_ids
        return [item for item in cart_items if item.product_id in products or item.vendor_id in vendors]

    def eligibility_error(self, cart_items, subtotal, as_of=None):
        """Return the reason this coupon cannot be used, or None when it can."""
        now = as_of or datetime.now(UTC)

        if not self.is_active:
            return COUPON_INACTIVE
        if self.starts_at and now < _as_utc(self.starts_at):
            return COUPON_NOT_STARTED
        if self.ends_at and now >= _as_utc(self.ends_at):
            return COUPON_EXPIRED
        if self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit:
            return COUPON_EXHAUSTED
        if self.min_subtotal is not None and subtotal < self.min_subtotal:
            return f"Order must be at least {self.min_subtotal:.2f} to use {self.code}"
        if self.is_scoped and not self.eligible_items(cart_items):
            return COUPON_OUT_OF_SCOPE
        return None

    def discount_for(self, cart_items, subtotal):
        """Flat discount amount for this cart, in the subtotal's currency."""
        if self.is_scoped:
            base = sum(item.line_total for item in self.eligible_items(cart_items))
        else:
            base = subtotal

        if self.discount_type == DiscountType.PERCENTAGE.value:
            discount = base * self.discount_value / 100
        else:
            discount = self.discount_value

        if self.max_discount is not None:
            discount = min(discount, self.max_discount)
        return round(max(min(discount, base), 0.0), 2)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def redeem(self):
        """Count one use of the coupon against its usage limit."""
        if not self.is_active:
            raise ValidationError({"coupon": [COUPON_INACTIVE]})
        if self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit:
            raise ValidationError({"coupon": [COUPON_EXHAUSTED]})

        self.used_count = (self.used_count or 0) + 1
        self.raise_(
            CouponRedeemed(
                coupon_id=str(self.id),
                code=self.code,
                used_count=self.used_count,
                redeemed_at=datetime.now(UTC),
            )
        )

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"coupon": ["Coupon is already inactive"]})

        self.is_active = False
        self.raise_(
            CouponDeactivated(
                coupon_id=str(self.id),
                code=self.code,
                deactivated_at=datetime.now(UTC),
            )
        )
