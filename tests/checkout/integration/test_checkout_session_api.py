"""Integration tests for checkout session API endpoints via TestClient."""

import pytest
from checkout.api.routes import session_router
from checkout.session.session import CheckoutSession
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers

_CART = [{"product_id": "prod-001", "vendor_id": "V1", "quantity": 2, "unit_price": 50.0}]


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(session_router)
    return TestClient(app)


def _create_session(client, subtotal=100.0):
    response = client.post("/checkout-sessions", json={"customer_id": "cust-001", "subtotal": subtotal})
    assert response.status_code == 201
    return response.json()["session_id"]


class TestSessionEndpoints:
    def test_create_and_fetch(self, client):
        session_id = _create_session(client)

        response = client.get(f"/checkout-sessions/{session_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["coupon_state"] == "No_Coupon"
        assert data["subtotal"] == 100.0
        assert data["grand_total"] == 100.0

    def test_unknown_session(self, client):
        response = client.get("/checkout-sessions/missing")
        assert response.status_code == 404


class TestSessionCouponEndpoints:
    def test_apply_and_remove(self, client, coupon_service):
        coupon_service.add_coupon("SAVE10", discount=10)
        session_id = _create_session(client)

        response = client.post(f"/checkout-sessions/{session_id}/coupon", json={"code": "SAVE10", "items": _CART})
        assert response.json()["ok"] is True

        session = current_domain.repository_for(CheckoutSession).get(session_id)
        assert session.discount_total == 10.0

        response = client.delete(f"/checkout-sessions/{session_id}/coupon")
        assert response.status_code == 200
        assert response.json()["discount"] == 0.0
        assert response.json()["grand_total"] == 100.0
        assert len(coupon_service.calls) == 1

    def test_rejected_coupon_is_recorded(self, client, coupon_service):
        session_id = _create_session(client)

        response = client.post(f"/checkout-sessions/{session_id}/coupon", json={"code": "NOPE", "items": _CART})

        assert response.json()["ok"] is False
        session = client.get(f"/checkout-sessions/{session_id}").json()
        assert session["coupon_state"] == "No_Coupon"
        assert session["coupon_error"] == "Invalid coupon code"

    def test_remove_without_coupon_rejected(self, client):
        session_id = _create_session(client)
        response = client.delete(f"/checkout-sessions/{session_id}/coupon")
        assert response.status_code == 400


class TestSessionShippingQuote:
    def test_quote_updates_totals(self, client, rates):
        rates.set_rate("V1", "cairo", 15)
        session_id = _create_session(client)

        response = client.post(f"/checkout-sessions/{session_id}/shipping-quote", json={"zone": "cairo", "items": _CART})

        assert response.status_code == 200
        assert response.json()["applied"] is True
        assert response.json()["total_shipping"] == 15.0

        session = client.get(f"/checkout-sessions/{session_id}").json()
        assert session["shipping_zone"] == "cairo"
        assert session["grand_total"] == 115.0

    def test_rate_store_failure_asks_to_retry(self, client, rates):
        rates.configure(should_succeed=False)
        session_id = _create_session(client)

        response = client.post(f"/checkout-sessions/{session_id}/shipping-quote", json={"zone": "cairo", "items": _CART})

        assert response.status_code == 503
        assert response.json()["detail"] == "Shipping rates are unavailable, please try again"

        session = client.get(f"/checkout-sessions/{session_id}").json()
        assert session["shipping_total"] is None
