"""Application tests for checkout (PlaceOrder) via domain.process()."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.product.management import UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.management import AddCartItem
from storefront.ordering.order.order import Order, OrderStatus
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.repository import order_lines_reference


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def juice(make_product):
    return make_product(name="Orange Juice Fresh", price=4.99, inventory=100)


@pytest.fixture()
def tea(make_product):
    return make_product(name="Iced Green Tea", price=6.99, inventory=5)


def _add(user, product, quantity):
    current_domain.process(
        AddCartItem(user_id=str(user.id), product_id=str(product.id), quantity=quantity),
        asynchronous=False,
    )


def _checkout(user, address, idempotency_key=None, notes=None):
    return current_domain.process(
        PlaceOrder(
            user_id=str(user.id),
            shipping_address=json.dumps(address) if address else None,
            notes=notes,
            idempotency_key=idempotency_key,
        ),
        asynchronous=False,
    )


def _product(product):
    return current_domain.repository_for(Product).get(product.id)


class TestSuccessfulCheckout:
    def test_totals_inventory_and_cart(self, user, juice, tea, shipping_address):
        _add(user, juice, 2)
        _add(user, tea, 1)

        order_id = _checkout(user, shipping_address, notes="Leave at the door")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.subtotal == 16.97
        assert order.tax == 1.36
        assert order.shipping_cost == 9.99
        assert order.total == 28.32
        assert order.notes == "Leave at the door"
        assert order.shipping_address.zip_code == "62701"
        assert sorted((i.product_name, i.quantity, i.price) for i in order.items) == [
            ("Iced Green Tea", 1, 6.99),
            ("Orange Juice Fresh", 2, 4.99),
        ]

        assert _product(juice).inventory == 98
        assert _product(tea).inventory == 4
        assert current_domain.repository_for(Cart).find_by_user(str(user.id)).items == []

    def test_order_lines_reference_products(self, user, juice, shipping_address):
        _add(user, juice, 1)
        _checkout(user, shipping_address)
        assert order_lines_reference(juice.id) == 1

    def test_confirmation_email_is_sent(self, user, juice, shipping_address):
        from storefront.notifications.channel import get_email_channel

        _add(user, juice, 1)
        order_id = _checkout(user, shipping_address)
        order = current_domain.repository_for(Order).get(order_id)

        mail = get_email_channel().sent_emails[-1]
        assert mail["to"] == user.email
        assert mail["subject"] == f"Order Confirmation - {order.order_number}"


class TestCheckoutRejections:
    def test_missing_address(self, user, juice):
        _add(user, juice, 1)
        with pytest.raises(ValidationError) as exc:
            _checkout(user, None)
        assert exc.value.messages["shipping_address"] == ["Shipping address is required"]

    def test_empty_cart(self, user, shipping_address):
        with pytest.raises(ValidationError) as exc:
            _checkout(user, shipping_address)
        assert exc.value.messages["cart"] == ["Cart is empty"]

    def test_insufficient_stock_writes_nothing(self, user, juice, tea, shipping_address):
        _add(user, juice, 2)
        _add(user, tea, 3)
        current_domain.process(UpdateProduct(product_id=str(tea.id), inventory=2), asynchronous=False)

        with pytest.raises(ValidationError) as exc:
            _checkout(user, shipping_address)

        assert exc.value.messages["cart"] == ["Insufficient inventory for Iced Green Tea"]
        assert _product(juice).inventory == 100
        assert _product(tea).inventory == 2
        assert len(current_domain.repository_for(Cart).find_by_user(str(user.id)).items) == 2
        assert current_domain.repository_for(Order).for_user(str(user.id)) == []

    def test_deactivated_product_blocks_checkout(self, user, juice, tea, shipping_address):
        _add(user, juice, 1)
        _add(user, tea, 1)
        current_domain.process(UpdateProduct(product_id=str(juice.id), is_active=False), asynchronous=False)

        with pytest.raises(ValidationError) as exc:
            _checkout(user, shipping_address)

        assert exc.value.messages["cart"] == ["Product Orange Juice Fresh is not available"]
        assert _product(tea).inventory == 5


class TestIdempotency:
    def test_same_key_returns_same_order(self, user, juice, shipping_address):
        _add(user, juice, 1)
        first = _checkout(user, shipping_address, idempotency_key="checkout-1")
        second = _checkout(user, shipping_address, idempotency_key="checkout-1")

        assert first == second
        assert len(current_domain.repository_for(Order).for_user(str(user.id))) == 1
        assert _product(juice).inventory == 99

    def test_different_keys_place_separate_orders(self, user, juice, shipping_address):
        _add(user, juice, 1)
        first = _checkout(user, shipping_address, idempotency_key="checkout-1")
        _add(user, juice, 1)
        second = _checkout(user, shipping_address, idempotency_key="checkout-2")
        assert first != second


class TestStockAcrossCheckouts:
    def test_sequential_checkouts_never_oversell(self, make_user, make_product, shipping_address):
        product = make_product(name="Energy Boost", price=3.49, inventory=3)
        shoppers = [make_user(email=f"shopper{n}@example.com") for n in range(3)]
        for shopper in shoppers:
            _add(shopper, product, 2)

        placed, rejected = 0, 0
        for shopper in shoppers:
            try:
                _checkout(shopper, shipping_address)
                placed += 1
            except ValidationError:
                rejected += 1

        assert (placed, rejected) == (1, 2)
        assert _product(product).inventory == 1


class TestPriceSnapshot:
    def test_later_price_change_leaves_order_untouched(self, user, juice, shipping_address):
        _add(user, juice, 2)
        order_id = _checkout(user, shipping_address)

        current_domain.process(UpdateProduct(product_id=str(juice.id), price=9.99), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].price == 4.99
        assert order.subtotal == 9.98


class TestCheckoutRollback:
    def test_failure_while_emptying_cart_undoes_stock_and_order(self, monkeypatch, user, juice, tea, shipping_address):
        _add(user, juice, 2)
        _add(user, tea, 1)

        def fail_clear(self):
            raise RuntimeError("cart store unavailable")

        monkeypatch.setattr(Cart, "clear", fail_clear)

        with pytest.raises(RuntimeError):
            _checkout(user, shipping_address)

        assert _product(juice).inventory == 100
        assert _product(tea).inventory == 5
        assert current_domain.repository_for(Order).for_user(str(user.id)) == []
        assert order_lines_reference(juice.id) == 0

        monkeypatch.undo()
        assert len(current_domain.repository_for(Cart).find_by_user(str(user.id)).items) == 2
