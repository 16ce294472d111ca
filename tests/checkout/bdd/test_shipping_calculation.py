"""BDD tests for shipping calculation."""

import asyncio

from checkout.cart.line_items import CartLineItem
from checkout.shipping.calculator import calculate_shipping
from checkout.shipping.port import ShippingLookupError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/shipping_calculation.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('vendor "{vendor_id}" charges {cost:g} for "{zone}"'))
def vendor_zone_rate(rates, vendor_id, cost, zone):
    rates.set_rate(vendor_id, zone, cost)


@given(parsers.cfparse('vendor "{vendor_id}" has a default shipping cost of {cost:g}'))
def vendor_default_cost(rates, vendor_id, cost):
    rates.set_profile(vendor_id, cost)


@given("the rate store is unavailable")
def rate_store_unavailable(rates):
    rates.configure(should_succeed=False)


@given(parsers.cfparse('an item from vendor "{vendor_id}"'))
def vendor_item(cart_items, vendor_id):
    cart_items.append(CartLineItem(product_id=f"prod-{len(cart_items) + 1:03d}", vendor_id=vendor_id))


@given(parsers.cfparse('a free-shipping item from vendor "{vendor_id}"'))
def free_shipping_item(cart_items, vendor_id):
    cart_items.append(
        CartLineItem(product_id=f"prod-{len(cart_items) + 1:03d}", vendor_id=vendor_id, is_free_shipping=True)
    )


@given("a platform item")
def platform_item(cart_items):
    cart_items.append(CartLineItem(product_id=f"prod-{len(cart_items) + 1:03d}"))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('shipping is calculated to "{zone}"'))
def calculate(rates, cart_items, zone, outcome):
    try:
        outcome["result"] = asyncio.run(calculate_shipping(cart_items, zone))
    except ShippingLookupError as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the total shipping is {total:g}"))
def total_shipping_is(outcome, total):
    assert outcome["exc"] is None
    assert outcome["result"].total_shipping == total


@then(parsers.cfparse('vendor "{vendor_id}" is charged {cost:g} as "{reason}"'))
def vendor_charged(outcome, vendor_id, cost, reason):
    charge = outcome["result"].charge_for(vendor_id)
    assert charge.cost == cost
    assert charge.reason.value == reason


@then(parsers.cfparse('the platform is charged {cost:g} as "{reason}"'))
def platform_charged(outcome, cost, reason):
    charge = outcome["result"].charge_for(None)
    assert charge.cost == cost
    assert charge.reason.value == reason


@then("the shipping calculation fails")
def calculation_fails(outcome):
    assert isinstance(outcome["exc"], ShippingLookupError)
    assert outcome["result"] is None
