"""Email channel port.

Adapters implement ``deliver`` for a single provider. ``send`` wraps it and
reports the outcome as a result dict, so callers never handle provider
rejections themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str
    html_body: str | None = None


class EmailDeliveryError(Exception):
    """The provider refused or failed to accept a message."""


class EmailPort(ABC):
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        """Deliver one message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (on failure)
        """
        message = EmailMessage(to=to, subject=subject, body=body, html_body=html_body)
        try:
            message_id = self.deliver(message)
        except EmailDeliveryError as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}
        return {"message_id": message_id, "status": "sent"}

    @abstractmethod
    def deliver(self, message: EmailMessage) -> str:
        """Hand ``message`` to the provider and return its message id.

        Raises:
            EmailDeliveryError: the provider did not accept the message.
        """
