"""SMTP email adapter.

Sends multipart (plain + HTML) messages with the standard library's
``smtplib``. When host or credentials are missing the adapter stays
disabled and every send is skipped with a warning.
"""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from storefront.notifications.channel.email_port import FAILED, SENT, SKIPPED, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str | None,
        port: int,
        user: str | None,
        password: str | None,
        secure: bool,
        from_email: str,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.secure = secure
        self.from_email = from_email
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def _connect(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        connection = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        connection.starttls()
        return connection

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not self.is_configured:
            logger.warning("email_not_configured", to=to, subject=subject)
            return {"message_id": None, "status": SKIPPED, "error": "Email not configured"}

        message = EmailMessage()
        message["From"] = self.from_email
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with self._connect() as connection:
                connection.login(self.user, self.password)
                connection.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("email_send_failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": FAILED, "error": str(exc)}

        logger.info("email_sent", to=to, subject=subject)
        return {"message_id": message["Message-ID"], "status": SENT}
