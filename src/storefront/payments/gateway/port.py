"""Payment gateway port (abstract interface).

Order and payment code talks to this contract only, so the provider
(Stripe in production, a fake in development and tests) can be swapped
through configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentIntentResult:
    """A payment intent as created by the provider."""

    intent_id: str
    client_secret: str
    status: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        """Ask the provider for a payment intent of ``amount`` minor units.

        Raises ``PaymentProviderError`` when the provider refuses or is unreachable.
        """
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> dict:
        """Verify a webhook and return the decoded event.

        Raises ``WebhookSignatureError`` before looking at the payload's
        content when the signature does not match.
        """
        ...
