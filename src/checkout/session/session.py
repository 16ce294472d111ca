"""CheckoutSession aggregate (CQRS): what the customer is about to pay.

Holds the cart subtotal, the coupon state and the latest shipping quote
for one checkout. Coupon state machine:

    NO_COUPON → APPLYING → APPLIED
                APPLYING → NO_COUPON (rejected, with error)
    APPLIED → NO_COUPON (removed)

Shipping quotes are tagged with a snapshot of the cart and destination. A
quote that comes back for an older snapshot is discarded.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from checkout.domain import checkout
from checkout.session.events import CouponAccepted, CouponRejected, CouponRemoved, ShippingQuoted

logger = structlog.get_logger(__name__)


class CouponState(Enum):
    NO_COUPON = "No_Coupon"
    APPLYING = "Applying"
    APPLIED = "Applied"


_VALID_TRANSITIONS = {
    CouponState.NO_COUPON: {CouponState.APPLYING},
    CouponState.APPLYING: {CouponState.APPLIED, CouponState.NO_COUPON},
    CouponState.APPLIED: {CouponState.NO_COUPON},
}


@checkout.aggregate
class CheckoutSession:
    customer_id = Identifier()  # Nullable for guest checkouts
    subtotal = Float(min_value=0.0, default=0.0)
    coupon_state = String(choices=CouponState, default=CouponState.NO_COUPON.value)
    coupon_code = String(max_length=50)
    coupon_id = Identifier()
    discount = Float(default=0.0)
    coupon_error = String(max_length=255)
    shipping_zone = String(max_length=50)
    shipping_total = Float()
    shipping_quote_key = String(max_length=64)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id=None, subtotal=0.0):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            subtotal=subtotal,
            coupon_state=CouponState.NO_COUPON.value,
            discount=0.0,
            created_at=now,
            updated_at=now,
        )

    def _assert_can_transition(self, target_state):
        current = CouponState(self.coupon_state)
        if target_state not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"coupon_state": [f"Cannot transition from {current.value} to {target_state.value}"]})

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    @property
    def discount_total(self):
        if CouponState(self.coupon_state) != CouponState.APPLIED:
            return 0.0
        return self.discount or 0.0

    @property
    def discounted_subtotal(self):
        return max(self.subtotal - self.discount_total, 0.0)

    @property
    def grand_total(self):
        return self.discounted_subtotal + (self.shipping_total or 0.0)

    def update_subtotal(self, subtotal):
        if subtotal is None or subtotal < 0:
            raise ValidationError({"subtotal": ["Subtotal cannot be negative"]})
        self.subtotal = subtotal
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Coupon state machine
    # -------------------------------------------------------------------
    def start_coupon_application(self):
        self._assert_can_transition(CouponState.APPLYING)
        self.coupon_state = CouponState.APPLYING.value
        self.coupon_error = None
        self.updated_at = datetime.now(UTC)

    def accept_coupon(self, coupon_code, discount, coupon_id=None):
        self._assert_can_transition(CouponState.APPLIED)
        if discount is None or discount < 0:
            raise ValidationError({"discount": ["Discount cannot be negative"]})

        self.coupon_state = CouponState.APPLIED.value
        self.coupon_code = coupon_code
        self.coupon_id = coupon_id
        self.discount = discount
        self.coupon_error = None
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CouponAccepted(
                session_id=str(self.id),
                coupon_code=coupon_code,
                coupon_id=coupon_id,
                discount=discount,
            )
        )

    def reject_coupon(self, reason, coupon_code=None):
        self._assert_can_transition(CouponState.NO_COUPON)
        self.coupon_state = CouponState.NO_COUPON.value
        self.coupon_code = None
        self.coupon_id = None
        self.discount = 0.0
        self.coupon_error = reason
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CouponRejected(
                session_id=str(self.id),
                coupon_code=coupon_code,
                reason=reason,
            )
        )

    def remove_coupon(self):
        """Drop the applied coupon. Purely local: the coupon service is not consulted."""
        if CouponState(self.coupon_state) != CouponState.APPLIED:
            raise ValidationError({"coupon_state": ["No coupon is applied"]})

        removed_code = self.coupon_code
        self.coupon_state = CouponState.NO_COUPON.value
        self.coupon_code = None
        self.coupon_id = None
        self.discount = 0.0
        self.coupon_error = None
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CouponRemoved(
                session_id=str(self.id),
                coupon_code=removed_code,
            )
        )

    # -------------------------------------------------------------------
    # Shipping quotes
    # -------------------------------------------------------------------
    def begin_shipping_quote(self, snapshot_key, zone):
        """Mark ``snapshot_key`` as the only quote this session will accept."""
        self.shipping_quote_key = snapshot_key
        self.shipping_zone = zone
        self.shipping_total = None
        self.updated_at = datetime.now(UTC)

    def record_shipping_quote(self, snapshot_key, shipping_total):
        """Apply a finished quote. Returns False when the quote is stale."""
        if snapshot_key != self.shipping_quote_key:
            logger.info(
                "Discarding stale shipping quote",
                session_id=str(self.id),
                expected=self.shipping_quote_key,
                received=snapshot_key,
            )
            return False

        self.shipping_total = shipping_total
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingQuoted(
                session_id=str(self.id),
                zone=self.shipping_zone,
                shipping_total=shipping_total,
            )
        )
        return True
