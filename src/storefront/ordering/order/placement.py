"""Order placement: turn a user's cart into an Order.

Everything happens inside the command handler's unit of work: the Order
is created with price snapshots, each product's inventory is decremented
and the cart is emptied. If any step raises, nothing is persisted.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.ordering.order.order import Order
from storefront.ordering.order.pricing import generate_order_number, price_order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text()  # JSON: ShippingAddress fields
    notes = Text()
    idempotency_key = String(max_length=255)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_repo = current_domain.repository_for(Order)

        if command.idempotency_key:
            existing = order_repo.find_by_idempotency_key(command.user_id, command.idempotency_key)
            if existing is not None:
                logger.info(
                    "order_placement_replayed",
                    order_id=str(existing.id),
                    idempotency_key=command.idempotency_key,
                )
                return str(existing.id)

        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        if not shipping_address:
            raise ValidationError({"shipping_address": ["Shipping address is required"]})

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.find_by_user(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        # Check every line before touching anything; the first violation wins
        product_repo = current_domain.repository_for(Product)
        purchases = []
        for item in cart.items:
            product = product_repo.find_by_id(item.product_id)
            if product is None or not product.is_active:
                name = product.name if product is not None else item.product_id
                raise ValidationError({"cart": [f"Product {name} is not available"]})
            if product.inventory < item.quantity:
                raise ValidationError({"cart": [f"Insufficient inventory for {product.name}"]})
            purchases.append((product, item.quantity))

        totals = price_order([(product.price, quantity) for product, quantity in purchases])
        lines = [
            {
                "product_id": str(product.id),
                "product_name": product.name,
                "quantity": quantity,
                "price": product.price,
            }
            for product, quantity in purchases
        ]

        order = Order.place(
            user_id=command.user_id,
            order_number=generate_order_number(),
            lines=lines,
            totals=totals,
            shipping_address=shipping_address,
            notes=command.notes,
            idempotency_key=command.idempotency_key,
        )

        for product, quantity in purchases:
            product.reduce_inventory(quantity, order_id=str(order.id))
            product_repo.add(product)

        cart.clear()
        cart_repo.add(cart)
        order_repo.add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total=order.total,
        )
        return str(order.id)
