"""Order fixtures shared by the Payments tests."""

import json

import pytest
from protean import current_domain

from storefront.ordering.cart.management import AddCartItem
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder


@pytest.fixture()
def buyer(make_user):
    return make_user(email="payer@example.com")


@pytest.fixture()
def placed_order(buyer, make_product, shipping_address):
    product = make_product(name="Orange Juice Fresh", price=4.99, inventory=50)
    current_domain.process(
        AddCartItem(user_id=str(buyer.id), product_id=str(product.id), quantity=2),
        asynchronous=False,
    )
    order_id = current_domain.process(
        PlaceOrder(user_id=str(buyer.id), shipping_address=json.dumps(shipping_address)),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order_id)
