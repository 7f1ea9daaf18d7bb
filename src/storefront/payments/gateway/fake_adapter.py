"""Configurable fake payment gateway for development and testing.

No network calls. Intents get deterministic-looking ids, and webhooks are
accepted when their signature equals ``webhook_signature``
(``"test-signature"`` by default).
"""

import json
from uuid import uuid4

from storefront.payments.gateway.port import PaymentGateway, PaymentIntentResult
from storefront.shared.errors import PaymentProviderError, WebhookSignatureError


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, webhook_signature: str = "test-signature") -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.webhook_signature = webhook_signature
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": dict(metadata),
            }
        )

        if not self.should_succeed:
            raise PaymentProviderError(self.failure_reason)

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        return PaymentIntentResult(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            status="requires_payment_method",
        )

    def construct_event(self, payload: bytes, signature: str) -> dict:
        if signature != self.webhook_signature:
            raise WebhookSignatureError("Webhook signature verification failed")
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError(f"Webhook payload is not valid JSON: {exc}") from exc
