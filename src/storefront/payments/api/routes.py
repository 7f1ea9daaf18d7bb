"""FastAPI routes for payment intents, provider webhooks and payment history."""

import json

import structlog
from fastapi import APIRouter, Depends, Header, Request
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import get_current_principal
from storefront.identity.tokens import Principal
from storefront.payments.api.schemas import (
    CreatePaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
    WebhookResponse,
)
from storefront.payments.gateway import get_gateway
from storefront.payments.payment.initiation import CreatePaymentIntent
from storefront.payments.payment.payment import Payment
from storefront.payments.payment.reconciliation import ReconcilePaymentEvent
from storefront.shared.errors import WebhookSignatureError

logger = structlog.get_logger(__name__)

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-intent", response_model=PaymentIntentResponse)
@payment_router.post("/intent", response_model=PaymentIntentResponse, include_in_schema=False)
async def create_payment_intent(
    body: CreatePaymentIntentRequest, principal: Principal = Depends(get_current_principal)
) -> PaymentIntentResponse:
    command = CreatePaymentIntent(order_id=body.order_id, user_id=principal.user_id)
    result = current_domain.process(command, asynchronous=False)
    return PaymentIntentResponse(**result)


@payment_router.post("/webhook", response_model=WebhookResponse)
async def handle_webhook(
    request: Request,
    stripe_signature: str | None = Header(None, alias="stripe-signature"),
) -> WebhookResponse:
    """Receive a provider event. The signature is checked against the raw body before anything else."""
    if not stripe_signature:
        raise WebhookSignatureError("No signature provided")

    payload = await request.body()
    event = get_gateway().construct_event(payload, stripe_signature)

    event_type = event.get("type", "")
    data_object = (event.get("data") or {}).get("object") or {}
    logger.info("webhook_received", event_id=event.get("id"), event_type=event_type)

    command = ReconcilePaymentEvent(
        event_id=event.get("id"),
        event_type=event_type,
        data_object=json.dumps(data_object),
    )
    current_domain.process(command, asynchronous=False)
    return WebhookResponse()


@payment_router.get("/history", response_model=list[PaymentResponse])
async def payment_history(principal: Principal = Depends(get_current_principal)) -> list[PaymentResponse]:
    repo = current_domain.repository_for(Payment)
    payments = repo.history() if principal.is_admin else repo.history(user_id=principal.user_id)
    return [
        PaymentResponse(
            id=str(p.id),
            order_id=str(p.order_id),
            user_id=str(p.user_id),
            amount=p.amount,
            currency=p.currency,
            status=p.status,
            stripe_id=p.stripe_id,
            payment_method=p.payment_method,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )
        for p in payments
    ]
