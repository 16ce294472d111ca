"""FastAPI routes for the Checkout domain: shipping, coupons and checkout sessions."""

import json

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from checkout.api.schemas import (
    AddZoneRateRequest,
    ApplyCouponRequest,
    ApplySessionCouponRequest,
    CheckoutSessionResponse,
    CouponApplicationResponse,
    CouponIdResponse,
    CouponSchema,
    CreateCheckoutSessionRequest,
    CreateCouponRequest,
    RateIdResponse,
    SessionShippingQuoteResponse,
    SetDefaultShippingCostRequest,
    ShippingQuoteRequest,
    ShippingQuoteResponse,
    StatusResponse,
    ZoneSchema,
)
from checkout.coupons.applier import CouponApplicationResult, apply_coupon
from checkout.coupons.management import CreateCoupon, DeactivateCoupon
from checkout.session.services import apply_coupon_to_session, quote_shipping_for_stored_session
from checkout.session.session import CheckoutSession
from checkout.shipping.calculator import calculate_shipping
from checkout.shipping.port import ShippingLookupError
from checkout.shipping.settings import AddZoneRate, RemoveZoneRate, SetDefaultShippingCost
from checkout.shipping.zones import GOVERNORATES

SHIPPING_UNAVAILABLE = "Shipping rates are unavailable, please try again"


def _coupon_response(result: CouponApplicationResult) -> CouponApplicationResponse:
    coupon = None
    if result.coupon is not None:
        coupon = CouponSchema(
            id=result.coupon.id,
            code=result.coupon.code,
            discount_type=result.coupon.discount_type,
            discount_value=result.coupon.discount_value,
            description=result.coupon.description,
        )
    return CouponApplicationResponse(ok=result.ok, coupon=coupon, discount=result.discount, message=result.message)


def _session_response(session: CheckoutSession) -> CheckoutSessionResponse:
    return CheckoutSessionResponse(
        session_id=str(session.id),
        subtotal=session.subtotal,
        coupon_state=session.coupon_state,
        coupon_code=session.coupon_code,
        discount=session.discount_total,
        coupon_error=session.coupon_error,
        shipping_zone=session.shipping_zone,
        shipping_total=session.shipping_total,
        grand_total=session.grand_total,
    )


# ---------------------------------------------------------------------------
# Shipping Router
# ---------------------------------------------------------------------------
shipping_router = APIRouter(prefix="/shipping", tags=["shipping"])


@shipping_router.get("/zones", response_model=list[ZoneSchema])
async def list_zones() -> list[ZoneSchema]:
    return [ZoneSchema(code=zone.code, label=zone.label, label_en=zone.label_en) for zone in GOVERNORATES]


@shipping_router.post("/quote", response_model=ShippingQuoteResponse)
async def quote_shipping(body: ShippingQuoteRequest) -> ShippingQuoteResponse:
    try:
        result = await calculate_shipping([item.to_line_item() for item in body.items], body.zone)
    except ShippingLookupError:
        raise HTTPException(status_code=503, detail=SHIPPING_UNAVAILABLE) from None
    return ShippingQuoteResponse(**result.to_dict())


@shipping_router.post("/vendors/{vendor_id}/rates", status_code=201, response_model=RateIdResponse)
async def add_zone_rate(vendor_id: str, body: AddZoneRateRequest) -> RateIdResponse:
    command = AddZoneRate(vendor_id=vendor_id, zone=body.zone, cost=body.cost)
    result = current_domain.process(command, asynchronous=False)
    return RateIdResponse(rate_id=result)


@shipping_router.delete("/rates/{rate_id}", response_model=StatusResponse)
async def remove_zone_rate(rate_id: str) -> StatusResponse:
    current_domain.process(RemoveZoneRate(rate_id=rate_id), asynchronous=False)
    return StatusResponse(status="removed")


@shipping_router.put("/vendors/{vendor_id}/default-cost", response_model=StatusResponse)
async def set_default_shipping_cost(vendor_id: str, body: SetDefaultShippingCostRequest) -> StatusResponse:
    command = SetDefaultShippingCost(vendor_id=vendor_id, default_shipping_cost=body.default_shipping_cost)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Coupon Router
# ---------------------------------------------------------------------------
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.post("/apply", response_model=CouponApplicationResponse)
async def apply_coupon_code(body: ApplyCouponRequest) -> CouponApplicationResponse:
    """Validate a coupon for a cart. Rejections are reported in the body, not as HTTP errors."""
    result = await apply_coupon(body.code, [item.to_line_item() for item in body.items], body.subtotal)
    return _coupon_response(result)


@coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest) -> CouponIdResponse:
    command = CreateCoupon(
        code=body.code,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
        description=body.description,
        min_subtotal=body.min_subtotal,
        max_discount=body.max_discount,
        usage_limit=body.usage_limit,
        starts_at=body.starts_at,
        ends_at=body.ends_at,
        product_ids=json.dumps(body.product_ids),
        vendor_ids=json.dumps(body.vendor_ids),
    )
    result = current_domain.process(command, asynchronous=False)
    return CouponIdResponse(coupon_id=result)


@coupon_router.put("/{coupon_id}/deactivate", response_model=StatusResponse)
async def deactivate_coupon(coupon_id: str) -> StatusResponse:
    current_domain.process(DeactivateCoupon(coupon_id=coupon_id), asynchronous=False)
    return StatusResponse(status="deactivated")


# ---------------------------------------------------------------------------
# Checkout Session Router
# ---------------------------------------------------------------------------
session_router = APIRouter(prefix="/checkout-sessions", tags=["checkout"])


@session_router.post("", status_code=201, response_model=CheckoutSessionResponse)
async def create_checkout_session(body: CreateCheckoutSessionRequest) -> CheckoutSessionResponse:
    session = CheckoutSession.create(customer_id=body.customer_id, subtotal=body.subtotal)
    current_domain.repository_for(CheckoutSession).add(session)
    return _session_response(session)


@session_router.get("/{session_id}", response_model=CheckoutSessionResponse)
async def get_checkout_session(session_id: str) -> CheckoutSessionResponse:
    session = current_domain.repository_for(CheckoutSession).get(session_id)
    return _session_response(session)


@session_router.post("/{session_id}/coupon", response_model=CouponApplicationResponse)
async def apply_session_coupon(session_id: str, body: ApplySessionCouponRequest) -> CouponApplicationResponse:
    repo = current_domain.repository_for(CheckoutSession)
    session = repo.get(session_id)
    result = await apply_coupon_to_session(session, body.code, [item.to_line_item() for item in body.items])
    repo.add(session)
    return _coupon_response(result)


@session_router.delete("/{session_id}/coupon", response_model=CheckoutSessionResponse)
async def remove_session_coupon(session_id: str) -> CheckoutSessionResponse:
    repo = current_domain.repository_for(CheckoutSession)
    session = repo.get(session_id)
    session.remove_coupon()
    repo.add(session)
    return _session_response(session)


@session_router.post("/{session_id}/shipping-quote", response_model=SessionShippingQuoteResponse)
async def quote_session_shipping(session_id: str, body: ShippingQuoteRequest) -> SessionShippingQuoteResponse:
    items = [item.to_line_item() for item in body.items]
    try:
        result, applied = await quote_shipping_for_stored_session(session_id, items, body.zone)
    except ShippingLookupError:
        raise HTTPException(status_code=503, detail=SHIPPING_UNAVAILABLE) from None
    return SessionShippingQuoteResponse(applied=applied, **result.to_dict())
