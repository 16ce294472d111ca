"""Checkout bounded context: Shipping quotes and Coupon application.

Prices a multi-vendor cart at checkout: zone-based shipping charges per
vendor group, coupon validation against the current cart, and the
per-session state that ties both to what the customer sees.
"""

import structlog
from protean.domain import Domain

checkout = Domain(name="checkout")

logger = structlog.get_logger(__name__)
