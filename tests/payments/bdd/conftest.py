"""Shared BDD fixtures and step definitions for the Payments context."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.ordering.order.order import Order
from storefront.payments.payment.initiation import CreatePaymentIntent
from storefront.payments.payment.payment import Payment


@pytest.fixture()
def provider_event(placed_order):
    """Build the data object the provider sends for ``event_type``."""

    def _build(event_type, intent):
        data = {"id": intent["payment_intent_id"], "metadata": {"order_id": str(placed_order.id)}}
        if event_type == "payment_intent.succeeded":
            data["payment_method"] = "pm_card_visa"
        elif event_type == "payment_intent.payment_failed":
            data["last_payment_error"] = {"message": "Your card was declined."}
        elif event_type == "charge.refunded":
            data = {"id": "ch_1", "payment_intent": intent["payment_intent_id"]}
        return json.dumps(data)

    return _build


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shopper placed an order")
def order_placed(placed_order):
    return placed_order


@given("a payment intent was created for the order", target_fixture="intent")
def intent_created(placed_order, buyer):
    return current_domain.process(
        CreatePaymentIntent(order_id=str(placed_order.id), user_id=str(buyer.id)),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the payment is "{status}"'))
def payment_status(placed_order, status):
    assert current_domain.repository_for(Payment).find_by_order(placed_order.id).status == status


@then(parsers.cfparse('the order is "{status}"'))
def order_status(placed_order, status):
    assert current_domain.repository_for(Order).get(placed_order.id).status == status
