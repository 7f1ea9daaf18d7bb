"""Order aggregate.

An Order is a frozen snapshot of a checkout: line prices, totals and the
shipping address never change after placement. Only the fulfilment status
moves, along this state machine:

    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING, PROCESSING → CANCELLED
    PROCESSING, DELIVERED, CANCELLED → REFUNDED

Payment reconciliation bypasses the admin map in two places: a succeeded
payment moves PENDING to PROCESSING, and a provider refund marks any
order REFUNDED.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.money import as_float


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),  # Terminal
}


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships. Captured at checkout and never edited."""

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line. ``price`` is the unit price at the moment of checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    order_number = String(required=True, max_length=50, unique=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    subtotal = Float(required=True, min_value=0.0)
    tax = Float(required=True, min_value=0.0)
    shipping_cost = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    notes = Text()
    idempotency_key = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        order_number,
        lines,
        totals,
        shipping_address,
        notes=None,
        idempotency_key=None,
    ):
        """Create a PENDING order.

        Args:
            lines: List of dicts with product_id, product_name, quantity, price.
            totals: ``OrderTotals`` with Decimal subtotal, tax, shipping_cost, total.
            shipping_address: Dict of ShippingAddress fields.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            order_number=order_number,
            status=OrderStatus.PENDING.value,
            shipping_address=ShippingAddress(**shipping_address),
            subtotal=as_float(totals.subtotal),
            tax=as_float(totals.tax),
            shipping_cost=as_float(totals.shipping_cost),
            total=as_float(totals.total),
            notes=notes,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    product_name=line["product_name"],
                    quantity=line["quantity"],
                    price=as_float(line["price"]),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                item_count=sum(line["quantity"] for line in lines),
                subtotal=order.subtotal,
                tax=order.tax,
                shipping_cost=order.shipping_cost,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _set_status(self, target_status):
        previous = self.status
        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=target_status.value,
                changed_at=now,
            )
        )

    def change_status(self, new_status):
        """Admin status change, validated against the transition map."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": ["Invalid order status"]}) from None

        self._assert_can_transition(target)
        self._set_status(target)

    def mark_processing(self) -> bool:
        """Move a paid order into PROCESSING.

        Only a PENDING order moves; any other status is left alone so that
        replayed payment notifications are harmless. Returns whether the
        status changed.
        """
        if OrderStatus(self.status) != OrderStatus.PENDING:
            return False
        self._set_status(OrderStatus.PROCESSING)
        return True

    def mark_refunded(self) -> bool:
        if OrderStatus(self.status) == OrderStatus.REFUNDED:
            return False
        self._set_status(OrderStatus.REFUNDED)
        return True
