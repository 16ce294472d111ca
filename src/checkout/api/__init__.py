"""Checkout domain API package."""

from checkout.api.routes import coupon_router, session_router, shipping_router

__all__ = ["coupon_router", "session_router", "shipping_router"]
