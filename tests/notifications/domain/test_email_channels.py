"""Tests for the email adapters and channel registry."""

import smtplib

from storefront.notifications.channel import get_email_channel, reset_channels, set_email_channel
from storefront.notifications.channel.fake_email import FakeEmailAdapter
from storefront.notifications.channel.smtp_email import SmtpEmailAdapter


class RecordingSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.logged_in = None
        self.messages = []
        self.tls = False
        RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message):
        self.messages.append(message)


class RefusingSMTP(RecordingSMTP):
    def login(self, user, password):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")


def _smtp(**overrides):
    options = {
        "host": "smtp.example.com",
        "port": 587,
        "user": "mailer",
        "password": "secret",
        "secure": False,
        "from_email": "noreply@example.com",
    }
    options.update(overrides)
    return SmtpEmailAdapter(**options)


class TestFakeEmailAdapter:
    def test_records_sent_email(self):
        adapter = FakeEmailAdapter()
        result = adapter.send(to="a@example.com", subject="Hi", body="Hello")
        assert result["status"] == "sent"
        assert adapter.sent_emails[0]["to"] == "a@example.com"
        assert len(adapter.outbox_for("a@example.com")) == 1
        assert adapter.outbox_for("b@example.com") == []

    def test_configured_failure(self):
        adapter = FakeEmailAdapter()
        adapter.configure(should_succeed=False, failure_reason="Mailbox full")
        result = adapter.send(to="a@example.com", subject="Hi", body="Hello")
        assert result == {"message_id": None, "status": "failed", "error": "Mailbox full"}
        assert adapter.sent_emails == []


class TestSmtpEmailAdapter:
    def test_unconfigured_adapter_skips(self):
        result = _smtp(host=None).send(to="a@example.com", subject="Hi", body="Hello")
        assert result["status"] == "skipped"

    def test_sends_multipart_message(self, monkeypatch):
        RecordingSMTP.instances = []
        monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)

        result = _smtp().send(to="a@example.com", subject="Hi", body="Hello", html_body="<p>Hello</p>")

        assert result["status"] == "sent"
        connection = RecordingSMTP.instances[0]
        assert connection.tls is True
        assert connection.logged_in == ("mailer", "secret")
        message = connection.messages[0]
        assert message["To"] == "a@example.com"
        assert message["From"] == "noreply@example.com"
        assert message.is_multipart()

    def test_secure_uses_ssl_connection(self, monkeypatch):
        RecordingSMTP.instances = []
        monkeypatch.setattr(smtplib, "SMTP_SSL", RecordingSMTP)

        result = _smtp(secure=True, port=465).send(to="a@example.com", subject="Hi", body="Hello")

        assert result["status"] == "sent"
        assert RecordingSMTP.instances[0].tls is False

    def test_transport_error_is_reported(self, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP", RefusingSMTP)

        result = _smtp().send(to="a@example.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert result["message_id"] is None


class TestChannelRegistry:
    def test_fake_is_the_default(self):
        assert isinstance(get_email_channel(), FakeEmailAdapter)

    def test_singleton(self):
        assert get_email_channel() is get_email_channel()

    def test_override_and_reset(self):
        custom = FakeEmailAdapter()
        set_email_channel(custom)
        assert get_email_channel() is custom
        reset_channels()
        assert get_email_channel() is not custom
