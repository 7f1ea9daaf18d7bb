"""Repository for the Cart aggregate."""

from storefront.domain import storefront
from protean.utils.globals import current_domain

from storefront.ordering.cart.cart import Cart, CartItem


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def get_or_create_for_user(self, user_id) -> Cart:
        """Return the user's cart, creating (and persisting) an empty one on first use."""
        cart = self.find_by_user(user_id)
        if cart is None:
            cart = Cart.create(user_id=str(user_id))
            self.add(cart)
        return cart


def find_cart_item(item_id) -> CartItem | None:
    """Look a cart line up across all carts."""
    return current_domain.repository_for(CartItem)._dao.query.filter(id=str(item_id)).all().first
