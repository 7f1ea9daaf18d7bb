"""Integration tests for the /payments endpoints."""

import json

import pytest
from protean import current_domain

from storefront.ordering.order.order import Order, OrderStatus
from storefront.payments.payment.payment import Payment, PaymentStatus


@pytest.fixture()
def buyer_headers(buyer, auth_headers):
    return auth_headers(buyer)


def _webhook(api_client, event, signature="test-signature"):
    headers = {"Content-Type": "application/json"}
    if signature is not None:
        headers["stripe-signature"] = signature
    return api_client.post("/api/payments/webhook", content=json.dumps(event).encode(), headers=headers)


def _succeeded_event(order):
    return {
        "id": "evt_succeeded",
        "type": "payment_intent.succeeded",
        "data": {"object": {"id": "pi_1", "payment_method": "pm_card", "metadata": {"order_id": str(order.id)}}},
    }


class TestCreateIntentEndpoint:
    def test_create_intent(self, api_client, placed_order, buyer_headers):
        response = api_client.post(
            "/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["paymentIntentId"].startswith("pi_fake_")
        assert data["clientSecret"]

    def test_intent_alias(self, api_client, placed_order, buyer_headers):
        response = api_client.post("/api/payments/intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)
        assert response.status_code == 200

    def test_unknown_order_is_404(self, api_client, buyer_headers):
        response = api_client.post("/api/payments/create-intent", json={"orderId": "missing"}, headers=buyer_headers)
        assert response.status_code == 404

    def test_other_users_order_is_403(self, api_client, placed_order, make_user, auth_headers):
        headers = auth_headers(make_user(email="stranger@example.com"))
        response = api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=headers)
        assert response.status_code == 403

    def test_requires_authentication(self, api_client, placed_order):
        response = api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)})
        assert response.status_code == 401

    def test_provider_failure_is_502(self, api_client, placed_order, buyer_headers):
        from storefront.payments.gateway import get_gateway

        get_gateway().configure(should_succeed=False, failure_reason="Gateway unavailable")
        response = api_client.post(
            "/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers
        )
        assert response.status_code == 502
        assert response.json() == {"error": "Gateway unavailable"}


class TestWebhookEndpoint:
    def test_valid_event_is_applied(self, api_client, placed_order, buyer_headers):
        api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)

        response = _webhook(api_client, _succeeded_event(placed_order))

        assert response.status_code == 200
        assert response.json() == {"received": True}
        payment = current_domain.repository_for(Payment).find_by_order(placed_order.id)
        assert payment.status == PaymentStatus.COMPLETED.value
        assert current_domain.repository_for(Order).get(placed_order.id).status == OrderStatus.PROCESSING.value

    def test_missing_signature_is_400(self, api_client, placed_order, buyer_headers):
        api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)

        response = _webhook(api_client, _succeeded_event(placed_order), signature=None)

        assert response.status_code == 400
        assert response.json() == {"error": "No signature provided"}
        assert current_domain.repository_for(Order).get(placed_order.id).status == OrderStatus.PENDING.value

    def test_forged_signature_is_400_and_changes_nothing(self, api_client, placed_order, buyer_headers):
        api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)

        response = _webhook(api_client, _succeeded_event(placed_order), signature="forged")

        assert response.status_code == 400
        payment = current_domain.repository_for(Payment).find_by_order(placed_order.id)
        assert payment.status == PaymentStatus.PENDING.value
        assert current_domain.repository_for(Order).get(placed_order.id).status == OrderStatus.PENDING.value

    def test_unhandled_event_is_acknowledged(self, api_client):
        response = _webhook(api_client, {"id": "evt_2", "type": "customer.created", "data": {"object": {}}})
        assert response.status_code == 200
        assert response.json() == {"received": True}


class TestHistoryEndpoint:
    def test_shopper_sees_own_payments(self, api_client, placed_order, buyer_headers, make_user, auth_headers):
        api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)

        own = api_client.get("/api/payments/history", headers=buyer_headers).json()
        assert [p["orderId"] for p in own] == [str(placed_order.id)]

        stranger = auth_headers(make_user(email="stranger@example.com"))
        assert api_client.get("/api/payments/history", headers=stranger).json() == []

    def test_admin_sees_all(self, api_client, placed_order, buyer_headers, make_user, auth_headers):
        api_client.post("/api/payments/create-intent", json={"orderId": str(placed_order.id)}, headers=buyer_headers)
        admin = auth_headers(make_user(email="admin@example.com", role="ADMIN"))

        assert len(api_client.get("/api/payments/history", headers=admin).json()) == 1
