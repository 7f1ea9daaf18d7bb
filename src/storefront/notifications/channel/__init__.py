"""Email channel registry.

Provides singleton access to the email adapter. The fake adapter is used
unless ``EMAIL_BACKEND=smtp``.
"""

from storefront.config import get_settings
from storefront.notifications.channel.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        settings = get_settings()
        if settings.email_backend == "smtp":
            from storefront.notifications.channel.smtp_email import SmtpEmailAdapter

            _email_channel = SmtpEmailAdapter(
                host=settings.smtp_host,
                port=settings.smtp_port,
                user=settings.smtp_user,
                password=settings.smtp_password,
                secure=settings.smtp_secure,
                from_email=settings.from_email,
            )
        else:
            from storefront.notifications.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_channels():
    """Reset the channel singleton (useful for testing)."""
    global _email_channel
    _email_channel = None
