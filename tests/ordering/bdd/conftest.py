"""Shared BDD fixtures and step definitions for the Ordering context."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.catalogue.product.product import Product
from storefront.ordering.cart.management import AddCartItem


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def catalogue():
    """Products created by the scenario, keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shopper "{email}"'), target_fixture="shopper")
def shopper(make_user, email):
    return make_user(email=email)


@given(parsers.cfparse('a product "{name}" priced at {price:f} with {inventory:d} in stock'))
def product_in_stock(make_product, catalogue, name, price, inventory):
    catalogue[name] = make_product(name=name, price=price, inventory=inventory)


@given(parsers.cfparse('the shopper has {quantity:d} of "{name}" in their cart'))
def cart_line(shopper, catalogue, quantity, name):
    current_domain.process(
        AddCartItem(user_id=str(shopper.id), product_id=str(catalogue[name].id), quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {inventory:d} in stock'))
def stock_level(catalogue, name, inventory):
    assert current_domain.repository_for(Product).get(catalogue[name].id).inventory == inventory


@then(parsers.cfparse('checkout fails with "{message}"'))
def checkout_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"].messages)
