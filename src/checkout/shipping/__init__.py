"""Shipping rates factory.

Provides get_shipping_rates() / set_shipping_rates() to swap rate sources:
- RepositoryShippingRates reads vendor settings stored in the checkout domain
- InMemoryShippingRates for development and testing
"""

import os

from checkout.shipping.port import ShippingRatesPort

_current_rates: ShippingRatesPort | None = None


def get_shipping_rates() -> ShippingRatesPort:
    """Return the configured rate source (singleton).

    Reads vendor settings from the domain repositories by default. Set
    SHIPPING_RATES_ADAPTER=memory to use the in-memory source instead.
    """
    global _current_rates
    if _current_rates is None:
        adapter = os.environ.get("SHIPPING_RATES_ADAPTER", "repository")
        if adapter == "repository":
            from checkout.shipping.repository_adapter import RepositoryShippingRates

            _current_rates = RepositoryShippingRates()
        elif adapter == "memory":
            from checkout.shipping.fake_adapter import InMemoryShippingRates

            _current_rates = InMemoryShippingRates()
        else:
            raise ValueError(f"Unknown shipping rates adapter: {adapter}")
    return _current_rates


def set_shipping_rates(rates: ShippingRatesPort) -> None:
    """Override the active rate source (useful for tests)."""
    global _current_rates
    _current_rates = rates


def reset_shipping_rates() -> None:
    """Reset to the configured rate source."""
    global _current_rates
    _current_rates = None
