"""Invoice number assignment — command and handler.

Assignment is idempotent: when the order already has a number the handler
returns it untouched.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.numbering import next_invoice_number
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AssignInvoiceNumber:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class InvoiceNumberHandler:
    @handle(AssignInvoiceNumber)
    def assign_invoice_number(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.fetch(command.order_id)
        if order.invoice_number:
            return order.invoice_number

        order.assign_invoice_number(next_invoice_number())
        repo.add(order)

        logger.info(
            "Invoice number assigned",
            order_id=str(order.id),
            invoice_number=order.invoice_number,
        )
        return order.invoice_number
