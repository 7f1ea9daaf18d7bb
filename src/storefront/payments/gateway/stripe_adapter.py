"""Stripe payment gateway adapter, backed by the stripe-python SDK."""

import json

import stripe
import structlog

from storefront.payments.gateway.port import PaymentGateway, PaymentIntentResult
from storefront.shared.errors import PaymentProviderError, StorefrontError, WebhookSignatureError

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production gateway: PaymentIntents and signed webhooks."""

    def __init__(self, api_key: str | None, webhook_secret: str | None) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                metadata=metadata,
                api_key=self.api_key,
            )
        except stripe.StripeError as exc:
            logger.error(
                "stripe_payment_intent_failed",
                error=str(exc),
                order_id=metadata.get("order_id"),
            )
            raise PaymentProviderError(f"Payment provider error: {exc.user_message or exc}") from exc

        return PaymentIntentResult(
            intent_id=intent.id,
            client_secret=intent.client_secret,
            status=intent.status,
        )

    def construct_event(self, payload: bytes, signature: str) -> dict:
        if not self.webhook_secret:
            raise StorefrontError("Webhook secret not configured")

        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise WebhookSignatureError(f"Webhook signature verification failed: {exc}") from exc

        # Verified: interpret the raw body as a plain dict
        return json.loads(payload)
