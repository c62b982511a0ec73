"""Administrative order deletion — command and handler.

Deletion is irreversible: the order and its activity entries are removed,
nothing is archived. Stock withdrawn at placement is not returned.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.activity.activity import OrderActivity
from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    deleted_by = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.fetch(command.order_id)

        purged = current_domain.repository_for(OrderActivity).purge_order(order.id)
        repo._dao.delete(order)

        logger.warning(
            "Order deleted",
            order_id=str(order.id),
            order_number=order.order_number,
            deleted_by=str(command.deleted_by),
            activity_entries_removed=purged,
        )
