"""Notifications reacting to Ordering events: order confirmation email."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.notifications.dispatch import send_templated_email
from storefront.ordering.order.events import OrderPlaced
from storefront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderNotificationsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        try:
            user = current_domain.repository_for(User).get(event.user_id)
            order = current_domain.repository_for(Order).get(event.order_id)
        except ObjectNotFoundError:
            logger.warning("order_confirmation_skipped", order_id=str(event.order_id), user_id=str(event.user_id))
            return

        send_templated_email(
            to=user.email,
            template_name="order_confirmation",
            context={
                "order_number": event.order_number,
                "total": event.total,
                "items": [
                    {"product_name": i.product_name, "quantity": i.quantity, "price": i.price} for i in order.items
                ],
            },
        )
