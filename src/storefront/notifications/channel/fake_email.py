"""In-memory email adapter for tests."""

from uuid import uuid4

from storefront.notifications.channel.email_port import EmailDeliveryError, EmailMessage, EmailPort


class FakeEmailAdapter(EmailPort):
    """Keeps every accepted message in ``sent_emails``.

    ``configure(should_succeed=False)`` makes deliveries fail, and
    ``configure(raise_error=...)`` makes them raise an unexpected error, to
    exercise the dispatcher's error paths.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.configure()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_error: Exception | None = None,
    ):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def deliver(self, message: EmailMessage) -> str:
        if self.raise_error is not None:
            raise self.raise_error
        if not self.should_succeed:
            raise EmailDeliveryError(self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": message.to,
                "subject": message.subject,
                "body": message.body,
                "html_body": message.html_body,
            }
        )
        return message_id

    def reset(self):
        self.sent_emails.clear()
        self.configure()
