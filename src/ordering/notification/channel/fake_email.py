"""Fake mailer — keeps confirmations in memory for test assertions."""

from uuid import uuid4

from ordering.notification.channel.email_port import ConfirmationMailer, DeliveryReceipt


class FakeEmailAdapter(ConfirmationMailer):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send = False

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed", raise_on_send: bool = False):
        """``raise_on_send`` simulates a transport crash instead of a refused message."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send

    def send(self, to: str, subject: str, body: str) -> DeliveryReceipt:
        if self.raise_on_send:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return DeliveryReceipt(delivered=False, error=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return DeliveryReceipt(delivered=True, message_id=message_id)
