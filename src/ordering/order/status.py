"""Order status changes — command and handler.

Every call appends exactly one activity entry, even when the status does not
move, so the ledger records each operator action.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.access import Requester
from ordering.activity.activity import action_for_status
from ordering.activity.ledger import record_activity
from ordering.domain import ordering
from ordering.order.order import Order, parse_status

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class SetOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    changed_by = Identifier(required=True)
    changed_by_name = String(max_length=255)
    note = Text()


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(SetOrderStatus)
    def set_order_status(self, command):
        # Unknown labels are rejected before the order is even loaded
        target = parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.fetch(command.order_id)

        previous_status = order.change_status(
            target.value,
            changed_by=command.changed_by,
            changed_by_name=command.changed_by_name,
            note=command.note,
        )
        repo.add(order)

        record_activity(
            order_id=order.id,
            action=action_for_status(target.value).value,
            requester=Requester(user_id=str(command.changed_by), name=command.changed_by_name),
            from_status=previous_status,
            to_status=target.value,
            note=command.note or f"Order status changed from {previous_status} to {target.value}",
        )

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            from_status=previous_status,
            to_status=target.value,
            changed_by=str(command.changed_by),
        )
        return previous_status
