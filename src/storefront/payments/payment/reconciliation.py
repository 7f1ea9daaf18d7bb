"""Webhook reconciliation: Apply verified provider events to Payment and Order.

Only three event types change state:

* ``payment_intent.succeeded``: Payment COMPLETED, Order PENDING → PROCESSING
* ``payment_intent.payment_failed``: Payment FAILED, Order untouched
* ``charge.refunded``: Payment and Order REFUNDED

Anything else is acknowledged and ignored. Payment and Order are saved in
the same unit of work, so either both change or neither does.
"""

import json

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.payment.payment import Payment

logger = structlog.get_logger(__name__)

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"
CHARGE_REFUNDED = "charge.refunded"


@storefront.command(part_of="Payment")
class ReconcilePaymentEvent:
    event_id = String(max_length=255)
    event_type = String(required=True, max_length=100)
    data_object = Text(required=True)  # JSON: the event's data.object


@storefront.command_handler(part_of=Payment)
class ReconcilePaymentEventHandler:
    @handle(ReconcilePaymentEvent)
    def reconcile(self, command):
        data = json.loads(command.data_object) if isinstance(command.data_object, str) else command.data_object
        handlers = {
            PAYMENT_SUCCEEDED: self._payment_succeeded,
            PAYMENT_FAILED: self._payment_failed,
            CHARGE_REFUNDED: self._charge_refunded,
        }

        handler = handlers.get(command.event_type)
        if handler is None:
            logger.debug("webhook_event_ignored", event_id=command.event_id, event_type=command.event_type)
            return
        handler(command, data)

    def _payment_for_order(self, command, data) -> Payment | None:
        order_id = (data.get("metadata") or {}).get("order_id")
        payment = current_domain.repository_for(Payment).find_by_order(order_id) if order_id else None
        if payment is None:
            logger.warning(
                "webhook_payment_not_found",
                event_id=command.event_id,
                event_type=command.event_type,
                order_id=order_id,
                stripe_id=data.get("id"),
            )
        return payment

    def _payment_succeeded(self, command, data):
        payment = self._payment_for_order(command, data)
        if payment is None:
            return

        payment_repo = current_domain.repository_for(Payment)
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(payment.order_id)

        payment.mark_completed(payment_method=data.get("payment_method"))
        order.mark_processing()

        payment_repo.add(payment)
        order_repo.add(order)
        logger.info("payment_completed", order_id=str(order.id), payment_id=str(payment.id))

    def _payment_failed(self, command, data):
        payment = self._payment_for_order(command, data)
        if payment is None:
            return

        reason = (data.get("last_payment_error") or {}).get("message")
        if payment.mark_failed(reason=reason):
            current_domain.repository_for(Payment).add(payment)
        logger.info("payment_failed", order_id=str(payment.order_id), payment_id=str(payment.id), reason=reason)

    def _charge_refunded(self, command, data):
        stripe_id = data.get("payment_intent")
        payment_repo = current_domain.repository_for(Payment)
        payment = payment_repo.find_by_stripe_id(stripe_id) if stripe_id else None
        if payment is None:
            logger.warning("webhook_payment_not_found", event_id=command.event_id, stripe_id=stripe_id)
            return

        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(payment.order_id)

        payment.mark_refunded()
        order.mark_refunded()

        payment_repo.add(payment)
        order_repo.add(order)
        logger.info("payment_refunded", order_id=str(order.id), payment_id=str(payment.id))
