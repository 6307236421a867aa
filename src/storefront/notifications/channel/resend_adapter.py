"""Email adapter backed by the Resend API."""

import resend

from storefront.notifications.channel.email_port import EmailDeliveryError, EmailMessage, EmailPort


class ResendEmailAdapter(EmailPort):
    def __init__(self, api_key: str, sender: str):
        self.api_key = api_key
        self.sender = sender

    def _payload(self, message: EmailMessage) -> dict[str, object]:
        payload: dict[str, object] = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
            "text": message.body,
        }
        if message.html_body:
            payload["html"] = message.html_body
        return payload

    def deliver(self, message: EmailMessage) -> str:
        # The SDK reads its key from module state
        previous_api_key = getattr(resend, "api_key", None)
        resend.api_key = self.api_key
        try:
            response = resend.Emails.send(self._payload(message))
        except Exception as exc:
            raise EmailDeliveryError(str(exc)) from exc
        finally:
            resend.api_key = previous_api_key

        message_id = response.get("id") if isinstance(response, dict) else None
        if not message_id:
            raise EmailDeliveryError(str(response))
        return message_id
