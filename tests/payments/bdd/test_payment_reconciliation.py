"""BDD tests for payment reconciliation."""

from protean import current_domain
from pytest_bdd import given, parsers, scenarios, when

from storefront.payments.payment.reconciliation import ReconcilePaymentEvent

scenarios("features/payment_reconciliation.feature")


def _report(event_type, intent, provider_event):
    current_domain.process(
        ReconcilePaymentEvent(
            event_id=f"evt_{event_type}",
            event_type=event_type,
            data_object=provider_event(event_type, intent),
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the provider reported "{event_type}"'))
def provider_reported(intent, provider_event, event_type):
    _report(event_type, intent, provider_event)


@when(parsers.cfparse('the provider reports "{event_type}"'))
def provider_reports(intent, provider_event, event_type):
    _report(event_type, intent, provider_event)
