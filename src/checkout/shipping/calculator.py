"""Zone-based shipping calculator.

Groups the cart by vendor and prices each group with the policy chain.
Groups are independent, so their lookups run concurrently; the breakdown
still follows cart order. If any lookup fails the whole calculation fails
and no partial breakdown is returned.
"""

import asyncio

import structlog

from checkout.cart.line_items import CartLineItem, VendorGroup, group_by_vendor
from checkout.shipping import get_shipping_rates
from checkout.shipping.charges import ShippingCharge, ShippingResult
from checkout.shipping.policies import DEFAULT_POLICIES, ShippingPolicy
from checkout.shipping.port import ShippingRatesPort

logger = structlog.get_logger(__name__)


class ShippingCalculator:
    def __init__(
        self,
        rates: ShippingRatesPort | None = None,
        policies: tuple[ShippingPolicy, ...] = DEFAULT_POLICIES,
    ) -> None:
        self.rates = rates if rates is not None else get_shipping_rates()
        self.policies = policies

    async def calculate(self, cart_items: list[CartLineItem], destination_zone: str) -> ShippingResult:
        groups = group_by_vendor(cart_items)
        charges = await asyncio.gather(*(self._charge_for(group, destination_zone) for group in groups))
        result = ShippingResult(breakdown=tuple(charges))

        logger.info(
            "Shipping calculated",
            zone=destination_zone,
            vendor_groups=len(groups),
            total_shipping=result.total_shipping,
        )
        return result

    async def vendor_cost(self, vendor_id: str, destination_zone: str, has_free_shipping_product: bool = False) -> float:
        """Price a single vendor's shipment without building a cart."""
        group = VendorGroup(
            vendor_id=vendor_id,
            items=(CartLineItem(product_id="shipment", vendor_id=vendor_id, is_free_shipping=has_free_shipping_product),),
        )
        charge = await self._charge_for(group, destination_zone)
        return charge.cost

    async def _charge_for(self, group, zone: str) -> ShippingCharge:
        for policy in self.policies:
            charge = await policy.charge_for(group, zone, self.rates)
            if charge is not None:
                return charge
        raise LookupError(f"No shipping policy priced vendor group {group.vendor_id!r}")


async def calculate_shipping(
    cart_items: list[CartLineItem],
    destination_zone: str,
    rates: ShippingRatesPort | None = None,
) -> ShippingResult:
    """Total shipping plus a per-vendor breakdown for ``cart_items`` sent to ``destination_zone``."""
    return await ShippingCalculator(rates).calculate(cart_items, destination_zone)


async def get_shipping_cost(
    cart_items: list[CartLineItem],
    destination_zone: str,
    rates: ShippingRatesPort | None = None,
) -> float:
    result = await calculate_shipping(cart_items, destination_zone, rates)
    return result.total_shipping


async def get_vendor_shipping_cost(
    vendor_id: str,
    destination_zone: str,
    has_free_shipping_product: bool = False,
    rates: ShippingRatesPort | None = None,
) -> float:
    return await ShippingCalculator(rates).vendor_cost(vendor_id, destination_zone, has_free_shipping_product)
