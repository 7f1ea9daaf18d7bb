"""Notifications reacting to Identity events: verification and reset emails."""

import structlog
from protean.utils.mixins import handle

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.events import PasswordResetRequested, UserRegistered
from storefront.identity.user import User
from storefront.notifications.dispatch import send_templated_email

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=User)
class IdentityNotificationsHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        send_templated_email(
            to=event.email,
            template_name="verification",
            context={
                "first_name": event.first_name,
                "token": event.verify_token,
                "frontend_url": get_settings().frontend_url,
            },
        )

    @handle(PasswordResetRequested)
    def on_password_reset_requested(self, event: PasswordResetRequested) -> None:
        settings = get_settings()
        send_templated_email(
            to=event.email,
            template_name="password_reset",
            context={
                "first_name": event.first_name,
                "token": event.reset_token,
                "frontend_url": settings.frontend_url,
                "expiry_hours": settings.password_reset_expiry_hours,
            },
        )
