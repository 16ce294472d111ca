"""Cart line items and their grouping by vendor.

Shipping is charged per vendor group, so the calculator never looks at a
flat list of items. Platform-owned products (no vendor) form their own
group, modelled as a distinct type rather than a ``None`` key.
"""

import hashlib
import json
from dataclasses import dataclass, field

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class CartLineItem:
    """One product line in the customer's cart."""

    product_id: str
    quantity: int = 1
    unit_price: float = 0.0
    vendor_id: str | None = None
    is_free_shipping: bool = False

    def __post_init__(self):
        errors = {}
        if not self.product_id:
            errors["product_id"] = ["Product is required"]
        # bool is an int subclass
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            errors["quantity"] = ["Quantity must be a positive integer"]
        if (
            isinstance(self.unit_price, bool)
            or not isinstance(self.unit_price, (int, float))
            or self.unit_price < 0
        ):
            errors["unit_price"] = ["Unit price must be a non-negative number"]
        if errors:
            raise ValidationError(errors)

        # Blank vendor ids come from storefront payloads for platform products
        if not self.vendor_id:
            object.__setattr__(self, "vendor_id", None)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PlatformGroup:
    """Items sold by the platform itself."""

    items: tuple[CartLineItem, ...] = field(default_factory=tuple)

    @property
    def vendor_id(self) -> None:
        return None

    @property
    def has_free_shipping(self) -> bool:
        return any(item.is_free_shipping for item in self.items)


@dataclass(frozen=True)
class VendorGroup:
    """Items sold by a single marketplace vendor."""

    vendor_id: str
    items: tuple[CartLineItem, ...] = field(default_factory=tuple)

    @property
    def has_free_shipping(self) -> bool:
        return any(item.is_free_shipping for item in self.items)


CartGroup = PlatformGroup | VendorGroup


def group_by_vendor(cart_items) -> list[CartGroup]:
    """Partition items by vendor, in the order each vendor first appears."""
    buckets: dict[str | None, list[CartLineItem]] = {}
    for item in cart_items:
        buckets.setdefault(item.vendor_id, []).append(item)

    return [
        PlatformGroup(items=tuple(items)) if vendor_id is None else VendorGroup(vendor_id=vendor_id, items=tuple(items))
        for vendor_id, items in buckets.items()
    ]


def cart_subtotal(cart_items) -> float:
    return sum(item.line_total for item in cart_items)


def cart_snapshot_key(cart_items, zone: str) -> str:
    """Stable digest of cart contents + destination, used to detect stale quotes."""
    payload = {
        "zone": zone,
        "items": [
            [item.product_id, item.vendor_id, item.is_free_shipping, item.quantity, item.unit_price]
            for item in cart_items
        ],
    }
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()
