"""Shared BDD fixtures and step definitions for the Catalogue context."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.catalogue.product.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def gallery():
    """Uploaded images by the label a scenario gave them."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f} with {inventory:d} in stock'), target_fixture="product")
def existing_product(make_product, name, price, inventory):
    return make_product(name=name, price=price, inventory=inventory)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the operation fails with "{message}"'))
def operation_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"].messages)


@then(parsers.cfparse("the product has {count:d} images"))
def product_image_count(product, count):
    assert len(current_domain.repository_for(Product).get(product.id).images) == count
