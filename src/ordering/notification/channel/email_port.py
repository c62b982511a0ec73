"""Port for the order-confirmation mailer and the receipt it hands back."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DeliveryReceipt:
    """Outcome of one send. ``message_id`` is only set for delivered mail."""

    delivered: bool
    message_id: str | None = None
    error: str | None = None


class ConfirmationMailer(ABC):
    """Plain-text mail transport used for order confirmations."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> DeliveryReceipt:
        """Hand one message to the transport.

        A refused message comes back as an undelivered receipt; transport
        crashes propagate as exceptions.
        """
        ...
