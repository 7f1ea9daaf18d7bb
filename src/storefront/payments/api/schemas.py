"""Pydantic request/response schemas for the Payments API."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict

from storefront.shared.schemas import ApiModel


class CreatePaymentIntentRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    order_id: str


class PaymentIntentResponse(ApiModel):
    client_secret: str
    payment_intent_id: str


class WebhookResponse(ApiModel):
    received: bool = True


class PaymentResponse(ApiModel):
    id: str
    order_id: str
    user_id: str
    amount: float
    currency: str
    status: str
    stripe_id: str | None = None
    payment_method: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
