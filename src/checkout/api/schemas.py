"""Pydantic request/response schemas for the Checkout API.

These are external contracts (anti-corruption layer): separate from
internal Protean commands and the calculator's result types.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from checkout.cart.line_items import CartLineItem


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineItemSchema(BaseModel):
    product_id: str
    vendor_id: str | None = None
    is_free_shipping: bool = False
    quantity: int = Field(ge=1, default=1)
    unit_price: float = Field(ge=0, default=0.0)

    def to_line_item(self) -> CartLineItem:
        return CartLineItem(
            product_id=self.product_id,
            vendor_id=self.vendor_id,
            is_free_shipping=self.is_free_shipping,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class ShippingChargeSchema(BaseModel):
    vendor_id: str | None
    cost: float
    reason: str


class CouponSchema(BaseModel):
    id: str
    code: str
    discount_type: str
    discount_value: float
    description: str | None = None


# ---------------------------------------------------------------------------
# Shipping
# ---------------------------------------------------------------------------
class ShippingQuoteRequest(BaseModel):
    zone: str
    items: list[CartLineItemSchema] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "zone": "cairo",
                    "items": [
                        {"product_id": "prod-001", "vendor_id": "vendor-001", "quantity": 2, "unit_price": 150.0},
                        {"product_id": "prod-002", "vendor_id": None, "quantity": 1, "unit_price": 80.0},
                    ],
                }
            ]
        }
    }


class ShippingQuoteResponse(BaseModel):
    total_shipping: float
    breakdown: list[ShippingChargeSchema]


class ZoneSchema(BaseModel):
    code: str
    label: str
    label_en: str


class AddZoneRateRequest(BaseModel):
    zone: str
    cost: float = Field(ge=0)


class SetDefaultShippingCostRequest(BaseModel):
    default_shipping_cost: float = Field(ge=0)


class RateIdResponse(BaseModel):
    rate_id: str


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
class ApplyCouponRequest(BaseModel):
    code: str
    subtotal: float = Field(ge=0)
    items: list[CartLineItemSchema] = Field(default_factory=list)


class CouponApplicationResponse(BaseModel):
    ok: bool
    coupon: CouponSchema | None = None
    discount: float | None = None
    message: str | None = None


class CreateCouponRequest(BaseModel):
    code: str
    discount_type: str = "Percentage"
    discount_value: float = Field(ge=0)
    description: str | None = None
    min_subtotal: float | None = Field(ge=0, default=None)
    max_discount: float | None = Field(ge=0, default=None)
    usage_limit: int | None = Field(ge=1, default=None)
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    product_ids: list[str] = Field(default_factory=list)
    vendor_ids: list[str] = Field(default_factory=list)


class CouponIdResponse(BaseModel):
    coupon_id: str


# ---------------------------------------------------------------------------
# Checkout sessions
# ---------------------------------------------------------------------------
class CreateCheckoutSessionRequest(BaseModel):
    customer_id: str | None = None
    subtotal: float = Field(ge=0, default=0.0)


class ApplySessionCouponRequest(BaseModel):
    code: str
    items: list[CartLineItemSchema] = Field(default_factory=list)


class CheckoutSessionResponse(BaseModel):
    session_id: str
    subtotal: float
    coupon_state: str
    coupon_code: str | None = None
    discount: float
    coupon_error: str | None = None
    shipping_zone: str | None = None
    shipping_total: float | None = None
    grand_total: float


class SessionShippingQuoteResponse(ShippingQuoteResponse):
    applied: bool


class StatusResponse(BaseModel):
    status: str = "ok"
