"""Writing to and reading from the order activity ledger."""

from protean.utils.globals import current_domain

from ordering.access import Requester, require_access
from ordering.activity.activity import OrderActivity


def record_activity(order_id, action, requester: Requester | None = None, from_status=None, to_status=None, note=None):
    """Append one entry. Joins the caller's unit of work when there is one."""
    entry = OrderActivity.entry(
        order_id=order_id,
        action=action,
        performed_by=requester.user_id if requester else None,
        performed_by_name=requester.display_name if requester else None,
        from_status=from_status,
        to_status=to_status,
        note=note,
    )
    current_domain.repository_for(OrderActivity).add(entry)
    return entry


def activities_for(order, requester: Requester) -> list[OrderActivity]:
    """Return an order's entries, newest first, if the requester may see the order."""
    require_access(requester, order.customer_id)
    return current_domain.repository_for(OrderActivity).for_order(order.id)
