"""Notifications: transactional email sent from domain event handlers."""

from storefront.notifications.handlers import identity_events, ordering_events  # noqa: F401
