"""Shipping rates port: abstract interface for the rate lookups the calculator needs.

The calculator programs against this port; adapters are swapped via
configuration. "Not found" is a normal answer (``None``), while transport
failures are raised and abort the whole calculation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ZoneRate:
    """A vendor's price for delivering to one zone."""

    vendor_id: str
    zone: str
    cost: float


@dataclass(frozen=True)
class ShippingProfile:
    """A vendor's fallback price when no zone rate exists."""

    vendor_id: str
    default_shipping_cost: float | None = None


class ShippingLookupError(Exception):
    """The rate store could not be reached or answered with an error."""


class ShippingRatesPort(ABC):
    """Abstract interface for shipping rate sources."""

    @abstractmethod
    async def get_shipping_rate(self, vendor_id: str, zone: str) -> ZoneRate | None:
        """Return the vendor's rate for ``zone``, or None when the vendor has none."""
        ...

    @abstractmethod
    async def get_vendor_shipping_profile(self, vendor_id: str) -> ShippingProfile | None:
        """Return the vendor's shipping profile, or None when it does not exist."""
        ...
