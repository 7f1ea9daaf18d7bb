"""Payments: provider payment intents and webhook reconciliation."""

from storefront.payments.payment import events, initiation, payment, reconciliation, repository  # noqa: F401
