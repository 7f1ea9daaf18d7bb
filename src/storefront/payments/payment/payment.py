"""Payment aggregate: one per order, tracking the provider's payment intent.

State Machine:
    PENDING → COMPLETED → REFUNDED
    PENDING → FAILED → PENDING (a new intent is requested)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront
from storefront.payments.payment.events import (
    PaymentCompleted,
    PaymentFailed,
    PaymentIntentCreated,
    PaymentRefunded,
)


class PaymentStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


@storefront.aggregate
class Payment:
    order_id = Identifier(required=True, unique=True)
    user_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="usd")
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    stripe_id = String(max_length=255)
    payment_method = String(max_length=255)
    failure_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def for_order(cls, order_id, user_id, amount, currency):
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            user_id=user_id,
            amount=amount,
            currency=currency,
            status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED.value

    def attach_intent(self, stripe_id, amount):
        """Point the payment at a freshly created provider intent and reset it to PENDING."""
        if self.is_completed:
            raise ValidationError({"order_id": ["Order already paid"]})

        now = datetime.now(UTC)
        self.stripe_id = stripe_id
        self.amount = amount
        self.status = PaymentStatus.PENDING.value
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            PaymentIntentCreated(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                stripe_id=stripe_id,
                amount=amount,
                currency=self.currency,
                created_at=now,
            )
        )

    def mark_completed(self, payment_method=None) -> bool:
        """Record a successful charge. Replays of the same notification are no-ops."""
        if self.status in (PaymentStatus.COMPLETED.value, PaymentStatus.REFUNDED.value):
            return False

        now = datetime.now(UTC)
        self.status = PaymentStatus.COMPLETED.value
        self.payment_method = payment_method
        self.updated_at = now

        self.raise_(
            PaymentCompleted(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                stripe_id=self.stripe_id,
                payment_method=payment_method,
                completed_at=now,
            )
        )
        return True

    def mark_failed(self, reason=None) -> bool:
        # A late failure notification never overrides a settled payment
        if self.status in (PaymentStatus.COMPLETED.value, PaymentStatus.REFUNDED.value):
            return False

        now = datetime.now(UTC)
        self.status = PaymentStatus.FAILED.value
        self.failure_reason = reason
        self.updated_at = now

        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                reason=reason,
                failed_at=now,
            )
        )
        return True

    def mark_refunded(self) -> bool:
        if self.status == PaymentStatus.REFUNDED.value:
            return False

        now = datetime.now(UTC)
        self.status = PaymentStatus.REFUNDED.value
        self.updated_at = now

        self.raise_(PaymentRefunded(payment_id=str(self.id), order_id=str(self.order_id), refunded_at=now))
        return True
