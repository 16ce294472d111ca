import pytest
from checkout.coupons import reset_coupon_service, set_coupon_service
from checkout.coupons.fake_adapter import FakeCouponService
from checkout.shipping import reset_shipping_rates, set_shipping_rates
from checkout.shipping.fake_adapter import InMemoryShippingRates


@pytest.fixture()
def rates():
    """In-memory rate source installed as the active shipping rates."""
    fake = InMemoryShippingRates()
    set_shipping_rates(fake)
    yield fake
    reset_shipping_rates()


@pytest.fixture()
def coupon_service():
    """Scripted coupon service installed as the active coupon service."""
    fake = FakeCouponService()
    set_coupon_service(fake)
    yield fake
    reset_coupon_service()
