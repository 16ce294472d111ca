"""Storefront checkout FastAPI application.

Serves shipping quotes, coupon validation and checkout sessions over HTTP.
Every request under a checkout prefix runs inside the checkout domain
context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"/unset → memory database, sync event processing
#   - "production" → PostgreSQL via DATABASE_URL, events still processed in-request
from checkout.domain import checkout
from checkout.utils.logging import add_context, clear_context, configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

configure_logging()
checkout.init()

_CHECKOUT_PREFIXES = ("/shipping", "/coupons", "/checkout-sessions")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront Checkout API",
    description="Multi-vendor storefront: shipping quotes, coupons and checkout sessions",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the checkout domain context for checkout requests."""
    if request.url.path.startswith(_CHECKOUT_PREFIXES):
        add_context(method=request.method, path=request.url.path)
        try:
            with checkout.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from checkout.api import coupon_router, session_router, shipping_router  # noqa: E402

app.include_router(shipping_router)
app.include_router(coupon_router)
app.include_router(session_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"checkout": {"name": checkout.name}}})
