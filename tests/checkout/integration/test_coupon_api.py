"""Integration tests for coupon API endpoints via TestClient."""

import pytest
from checkout.api.routes import coupon_router
from checkout.coupons.coupon import Coupon
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers

_CART = [
    {"product_id": "prod-001", "vendor_id": "V1", "quantity": 2, "unit_price": 50.0},
    {"product_id": "prod-002", "vendor_id": "V2", "quantity": 1, "unit_price": 40.0},
]


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(coupon_router)
    return TestClient(app)


def _create_coupon(client, **overrides):
    body = {"code": "SAVE10", "discount_type": "Percentage", "discount_value": 10.0}
    body.update(overrides)
    response = client.post("/coupons", json=body)
    assert response.status_code == 201
    return response.json()["coupon_id"]


class TestCreateCouponEndpoint:
    def test_create(self, client):
        coupon_id = _create_coupon(client, vendor_ids=["V1"])

        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        assert coupon.code == "SAVE10"
        assert coupon.scoped_vendor_ids == {"V1"}

    def test_duplicate_code_rejected(self, client):
        _create_coupon(client)
        response = client.post("/coupons", json={"code": "save10", "discount_value": 5.0})
        assert response.status_code == 400

    def test_percentage_over_one_hundred_rejected(self, client):
        response = client.post("/coupons", json={"code": "HALF", "discount_value": 150.0})
        assert response.status_code == 400


class TestApplyCouponEndpoint:
    def test_valid_coupon(self, client):
        coupon_id = _create_coupon(client)

        response = client.post("/coupons/apply", json={"code": "save10", "subtotal": 140.0, "items": _CART})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["discount"] == 14.0
        assert data["coupon"]["id"] == coupon_id
        assert data["coupon"]["code"] == "SAVE10"

    def test_scoped_coupon(self, client):
        _create_coupon(client, discount_type="Fixed", discount_value=100.0, vendor_ids=["V2"])

        response = client.post("/coupons/apply", json={"code": "SAVE10", "subtotal": 140.0, "items": _CART})

        assert response.json()["discount"] == 40.0

    def test_empty_code(self, client):
        response = client.post("/coupons/apply", json={"code": "  ", "subtotal": 140.0, "items": _CART})

        assert response.status_code == 200
        assert response.json() == {
            "ok": False,
            "coupon": None,
            "discount": None,
            "message": "Please enter a coupon code",
        }

    def test_unknown_code_is_not_an_http_error(self, client):
        response = client.post("/coupons/apply", json={"code": "NOPE", "subtotal": 140.0, "items": _CART})

        assert response.status_code == 200
        assert response.json()["message"] == "Invalid coupon code"

    def test_minimum_subtotal(self, client):
        _create_coupon(client, min_subtotal=200.0)

        response = client.post("/coupons/apply", json={"code": "SAVE10", "subtotal": 140.0, "items": _CART})

        assert response.json()["message"] == "Order must be at least 200.00 to use SAVE10"

    def test_deactivated_coupon(self, client):
        coupon_id = _create_coupon(client)
        response = client.put(f"/coupons/{coupon_id}/deactivate")
        assert response.json()["status"] == "deactivated"

        response = client.post("/coupons/apply", json={"code": "SAVE10", "subtotal": 140.0, "items": _CART})

        assert response.json()["ok"] is False
        assert response.json()["message"] == "This coupon is no longer active"
