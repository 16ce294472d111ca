"""Tests for the individual tiers of the shipping policy chain."""

import asyncio

import pytest
from checkout.cart.line_items import CartLineItem, PlatformGroup, VendorGroup
from checkout.shipping.calculator import ShippingCalculator
from checkout.shipping.charges import ShippingReason
from checkout.shipping.fake_adapter import InMemoryShippingRates
from checkout.shipping.policies import (
    FallbackRatePolicy,
    FreeProductPolicy,
    PlatformDefaultPolicy,
    VendorDefaultPolicy,
    ZoneRatePolicy,
)


def _vendor_group(vendor_id="V1", free=False):
    return VendorGroup(
        vendor_id=vendor_id,
        items=(CartLineItem(product_id="prod-001", vendor_id=vendor_id, is_free_shipping=free),),
    )


def _charge(policy, group, zone="cairo", rates=None):
    return asyncio.run(policy.charge_for(group, zone, rates or InMemoryShippingRates()))


class TestPolicies:
    def test_free_product_declines_when_nothing_is_free(self):
        assert _charge(FreeProductPolicy(), _vendor_group()) is None

    def test_free_product_prices_at_zero(self):
        charge = _charge(FreeProductPolicy(), _vendor_group(free=True))
        assert charge.cost == 0
        assert charge.reason == ShippingReason.FREE_PRODUCT

    def test_platform_default_only_applies_to_platform_groups(self):
        assert _charge(PlatformDefaultPolicy(), _vendor_group()) is None

        charge = _charge(PlatformDefaultPolicy(), PlatformGroup())
        assert charge.cost == 25
        assert charge.vendor_id is None

    def test_zone_rate_declines_without_rate(self):
        assert _charge(ZoneRatePolicy(), _vendor_group()) is None

    def test_zone_rate_answers_with_stored_cost(self):
        store = InMemoryShippingRates()
        store.set_rate("V1", "giza", 11)

        charge = _charge(ZoneRatePolicy(), _vendor_group(), zone="giza", rates=store)

        assert charge.cost == 11
        assert charge.reason == ShippingReason.ZONE_RATE

    def test_vendor_default_declines_without_profile(self):
        assert _charge(VendorDefaultPolicy(), _vendor_group()) is None

    def test_fallback_always_answers(self):
        charge = _charge(FallbackRatePolicy(), _vendor_group())
        assert charge.cost == 25
        assert charge.reason == ShippingReason.DEFAULT_RATE


class TestCustomChains:
    def test_first_matching_policy_wins(self):
        store = InMemoryShippingRates()
        store.set_rate("V1", "cairo", 9)
        calculator = ShippingCalculator(rates=store, policies=(FallbackRatePolicy(), ZoneRatePolicy()))

        result = asyncio.run(calculator.calculate([CartLineItem(product_id="prod-001", vendor_id="V1")], "cairo"))

        assert result.total_shipping == 25
        assert store.calls == []

    def test_exhausted_chain_is_an_error(self):
        calculator = ShippingCalculator(rates=InMemoryShippingRates(), policies=(ZoneRatePolicy(),))

        with pytest.raises(LookupError):
            asyncio.run(calculator.calculate([CartLineItem(product_id="prod-001", vendor_id="V1")], "cairo"))
