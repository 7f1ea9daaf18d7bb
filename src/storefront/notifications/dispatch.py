"""Fire-and-forget email dispatch used by the notification event handlers."""

import structlog

from storefront.notifications.channel import get_email_channel
from storefront.notifications.channel.email_port import FAILED
from storefront.notifications.templates import get_template

logger = structlog.get_logger(__name__)


def send_templated_email(to: str, template_name: str, context: dict) -> dict | None:
    """Render ``template_name`` and send it to ``to``.

    Never raises: failures are logged and ``None`` is returned, so a broken
    mail server cannot fail the request or event that triggered the email.
    """
    try:
        content = get_template(template_name).render(context)
        result = get_email_channel().send(
            to=to,
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
    except Exception as exc:
        logger.exception("email_dispatch_failed", to=to, template=template_name, error=str(exc))
        return None

    if result.get("status") == FAILED:
        logger.error("email_delivery_failed", to=to, template=template_name, error=result.get("error"))
    else:
        logger.info("email_dispatched", to=to, template=template_name, status=result.get("status"))
    return result
