"""BDD tests for checkout."""

import json

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.management import AddCartItem
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder

scenarios("features/checkout.feature")


@given(parsers.cfparse('another shopper bought {quantity:d} of "{name}"'))
def another_purchase(make_user, catalogue, shipping_address, quantity, name):
    other = make_user(email="early-bird@example.com")
    current_domain.process(
        AddCartItem(user_id=str(other.id), product_id=str(catalogue[name].id), quantity=quantity),
        asynchronous=False,
    )
    current_domain.process(
        PlaceOrder(user_id=str(other.id), shipping_address=json.dumps(shipping_address)),
        asynchronous=False,
    )


@when("the shopper checks out", target_fixture="order")
def checkout(shopper, shipping_address, error):
    try:
        order_id = current_domain.process(
            PlaceOrder(user_id=str(shopper.id), shipping_address=json.dumps(shipping_address)),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc
        return None
    return current_domain.repository_for(Order).get(order_id)


@then(parsers.cfparse('an order is created with status "{status}"'))
def order_status(order, status):
    assert order is not None
    assert order.status == status


@then(
    parsers.cfparse(
        "the order totals are subtotal {subtotal:f}, tax {tax:f}, shipping {shipping:f} and total {total:f}"
    )
)
def order_totals(order, subtotal, tax, shipping, total):
    assert (order.subtotal, order.tax, order.shipping_cost, order.total) == (subtotal, tax, shipping, total)


@then("the shopper's cart is empty")
def cart_empty(shopper):
    assert current_domain.repository_for(Cart).find_by_user(str(shopper.id)).items == []


@then(parsers.cfparse("the shopper's cart still has {count:d} line"))
def cart_lines(shopper, count):
    assert len(current_domain.repository_for(Cart).find_by_user(str(shopper.id)).items) == count
