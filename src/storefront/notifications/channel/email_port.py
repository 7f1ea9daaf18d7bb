"""Outbound email contract shared by the SMTP and in-memory adapters."""

from abc import ABC, abstractmethod

SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        """Deliver one message to ``to``.

        Adapters report delivery problems in the returned mapping instead of
        raising: ``{"message_id": ..., "status": SENT | SKIPPED | FAILED}``,
        plus ``"error"`` when the message did not go out.
        """
