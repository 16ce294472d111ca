"""Async checkout services that drive a CheckoutSession.

These await the coupon service and shipping rate lookups, then move the
session through its states. Callers holding a session object persist it
themselves; quote_shipping_for_stored_session works against the repository.
"""

from protean.utils.globals import current_domain

from checkout.cart.line_items import cart_snapshot_key
from checkout.coupons.applier import CouponApplicationResult, CouponApplier
from checkout.coupons.coupon import normalize_code
from checkout.session.session import CheckoutSession
from checkout.shipping.calculator import ShippingCalculator
from checkout.shipping.charges import ShippingResult


async def apply_coupon_to_session(
    session,
    code: str,
    cart_items: list,
    applier: CouponApplier | None = None,
) -> CouponApplicationResult:
    applier = applier or CouponApplier()

    session.start_coupon_application()
    result = await applier.apply(code, cart_items, session.subtotal)

    if result.ok:
        session.accept_coupon(
            coupon_code=result.coupon.code,
            discount=result.discount,
            coupon_id=result.coupon.id,
        )
    else:
        session.reject_coupon(result.message, coupon_code=normalize_code(code) or None)
    return result


async def quote_shipping_for_session(
    session,
    cart_items: list,
    zone: str,
    calculator: ShippingCalculator | None = None,
) -> tuple[ShippingResult, bool]:
    """Quote shipping and apply it to the session unless a newer quote was requested meanwhile.

    Returns the result together with whether the session accepted it.
    """
    calculator = calculator or ShippingCalculator()
    snapshot_key = cart_snapshot_key(cart_items, zone)

    session.begin_shipping_quote(snapshot_key, zone)
    result = await calculator.calculate(cart_items, zone)
    return result, session.record_shipping_quote(snapshot_key, result.total_shipping)


async def quote_shipping_for_stored_session(
    session_id: str,
    cart_items: list,
    zone: str,
    calculator: ShippingCalculator | None = None,
) -> tuple[ShippingResult, bool]:
    """Same as quote_shipping_for_session, for a session persisted in the repository.

    The outstanding snapshot is stored before the lookups start and the
    session is re-read afterwards, so a newer request wins even when it
    finishes first.
    """
    calculator = calculator or ShippingCalculator()
    snapshot_key = cart_snapshot_key(cart_items, zone)
    repo = current_domain.repository_for(CheckoutSession)

    session = repo.get(session_id)
    session.begin_shipping_quote(snapshot_key, zone)
    repo.add(session)

    result = await calculator.calculate(cart_items, zone)

    session = repo.get(session_id)
    applied = session.record_shipping_quote(snapshot_key, result.total_shipping)
    if applied:
        repo.add(session)
    return result, applied
