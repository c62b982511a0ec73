"""Order confirmation side-channel — reacts to OrderPlaced.

Dispatch is best-effort. Any failure (a failed status from the adapter or an
exception from the transport) becomes a ``NotificationFailure`` that is
logged and swallowed; it never reaches the customer or the order.
Only the ``production`` overlay sets ``event_processing = "async"``; there the
handler runs in the Protean engine and placement returns before the send
happens. Under the default sync processing the handler runs right after the
placement commits, so ``PlaceOrder`` waits for the send but still never sees
its outcome.
"""

import structlog
from protean.utils.mixins import handle

from ordering.config import get_settings
from ordering.domain import ordering
from ordering.errors import NotificationFailure
from ordering.notification.channel import EMAIL, get_channel
from ordering.notification.channel.email_port import DeliveryReceipt
from ordering.notification.templates import OrderConfirmationTemplate
from ordering.order.events import OrderPlaced
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _recipients(event: OrderPlaced) -> list[str]:
    recipients = [event.customer_email] if event.customer_email else []
    for address in get_settings().notification_recipients:
        if address not in recipients:
            recipients.append(address)
    return recipients


def _send(recipient: str, message: dict) -> DeliveryReceipt:
    try:
        receipt = get_channel(EMAIL).send(to=recipient, subject=message["subject"], body=message["body"])
    except Exception as exc:
        raise NotificationFailure(recipient, str(exc)) from exc
    if not receipt.delivered:
        raise NotificationFailure(recipient, receipt.error or "unknown error")
    return receipt


@ordering.event_handler(part_of=Order)
class OrderConfirmationHandler:
    """Sends the order confirmation to the customer and any configured operators."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        settings = get_settings()
        message = OrderConfirmationTemplate.render(
            {
                "order_number": event.order_number,
                "customer_name": event.customer_name,
                "item_count": event.item_count,
                "total": f"{event.total:.2f}",
                "currency_symbol": settings.currency_symbol,
                "store_name": settings.store_name,
            }
        )

        recipients = _recipients(event)
        if not recipients:
            logger.info("Order confirmation skipped, no recipients", order_id=str(event.order_id))
            return

        for recipient in recipients:
            try:
                receipt = _send(recipient, message)
            except NotificationFailure as exc:
                logger.warning(
                    "Order confirmation failed",
                    order_id=str(event.order_id),
                    recipient=exc.recipient,
                    reason=exc.reason,
                )
                continue
            logger.info(
                "Order confirmation sent",
                order_id=str(event.order_id),
                recipient=recipient,
                message_id=receipt.message_id,
            )
