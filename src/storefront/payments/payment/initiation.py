"""Payment intent creation: Command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.gateway import get_gateway
from storefront.payments.payment.payment import Payment
from storefront.shared.errors import PermissionDeniedError
from storefront.shared.money import to_minor_units

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Payment")
class CreatePaymentIntent:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Payment)
class CreatePaymentIntentHandler:
    @handle(CreatePaymentIntent)
    def create_payment_intent(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        if str(order.user_id) != str(command.user_id):
            raise PermissionDeniedError("Unauthorized")

        repo = current_domain.repository_for(Payment)
        payment = repo.find_by_order(order.id)
        if payment is not None and payment.is_completed:
            raise ValidationError({"order_id": ["Order already paid"]})

        currency = get_settings().currency
        intent = get_gateway().create_payment_intent(
            amount=to_minor_units(order.total),
            currency=currency,
            metadata={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "user_id": str(command.user_id),
            },
        )

        if payment is None:
            payment = Payment.for_order(
                order_id=str(order.id),
                user_id=str(order.user_id),
                amount=order.total,
                currency=currency,
            )
        payment.attach_intent(stripe_id=intent.intent_id, amount=order.total)
        repo.add(payment)

        logger.info(
            "payment_intent_created",
            order_id=str(order.id),
            payment_id=str(payment.id),
            stripe_id=intent.intent_id,
        )
        return {"client_secret": intent.client_secret, "payment_intent_id": intent.intent_id}
