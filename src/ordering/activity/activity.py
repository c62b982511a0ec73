"""OrderActivity aggregate — the append-only audit ledger of an order.

One entry is written when an order is placed and one for every status call,
including calls that leave the status unchanged. The actor's display name is
copied at write time, so the ledger stays accurate after profile edits or
account deletion. Entries have no mutators; they disappear only when their
order is deleted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from ordering.domain import ordering


class ActivityAction(Enum):
    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    APPROVED = "approved"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_ACTION_BY_STATUS = {
    "approved": ActivityAction.APPROVED,
    "processing": ActivityAction.PROCESSING,
    "shipped": ActivityAction.SHIPPED,
    "delivered": ActivityAction.DELIVERED,
    "cancelled": ActivityAction.CANCELLED,
}


def action_for_status(to_status: str) -> ActivityAction:
    return _ACTION_BY_STATUS.get(to_status, ActivityAction.STATUS_CHANGED)


@ordering.aggregate
class OrderActivity:
    order_id = Identifier(required=True)
    action = String(required=True, choices=ActivityAction)
    from_status = String(max_length=20)
    to_status = String(max_length=20)
    performed_by = Identifier()
    performed_by_name = String(max_length=255)
    note = Text()
    occurred_at = DateTime(required=True)

    @classmethod
    def entry(cls, order_id, action, performed_by=None, performed_by_name=None, from_status=None, to_status=None, note=None):
        return cls(
            order_id=str(order_id),
            action=ActivityAction(action).value,
            from_status=from_status,
            to_status=to_status,
            performed_by=str(performed_by) if performed_by else None,
            performed_by_name=performed_by_name or "System",
            note=note,
            occurred_at=datetime.now(UTC),
        )
