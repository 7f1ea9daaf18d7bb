"""Cart management: Commands and handler.

Every command is addressed by ``user_id``; the user's cart is created on
first use. Item commands check that the line belongs to that cart.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart, CartItem
from storefront.ordering.cart.repository import find_cart_item
from storefront.shared.errors import PermissionDeniedError


@storefront.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _available_product(product_id) -> Product:
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None or not product.is_active:
        raise ObjectNotFoundError("Product not found")
    return product


def _assert_in_stock(product: Product, quantity: int):
    if product.inventory < quantity:
        raise ValidationError({"quantity": ["Insufficient inventory"]})


def _owned_item(cart: Cart, item_id) -> CartItem:
    """Return the line from ``cart``; 403 if it lives in someone else's cart, 404 if nowhere."""
    item = next((i for i in cart.items if str(i.id) == str(item_id)), None)
    if item is not None:
        return item

    elsewhere = find_cart_item(item_id)
    if elsewhere is not None:
        raise PermissionDeniedError("Unauthorized")
    raise ObjectNotFoundError("Cart item not found")


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        quantity = command.quantity if command.quantity is not None else 1
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        product = _available_product(command.product_id)
        _assert_in_stock(product, quantity)

        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_user(command.user_id) or Cart.create(user_id=command.user_id)

        existing = cart.line_for(product.id)
        if existing is not None:
            _assert_in_stock(product, existing.quantity + quantity)

        item = cart.add_item(product_id=str(product.id), quantity=quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        if command.quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        item = _owned_item(cart, command.item_id)

        product = current_domain.repository_for(Product).get(item.product_id)
        _assert_in_stock(product, command.quantity)

        cart.update_item_quantity(item_id=item.id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        item = _owned_item(cart, command.item_id)

        cart.remove_item(item_id=item.id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart not found")

        cart.clear()
        repo.add(cart)
