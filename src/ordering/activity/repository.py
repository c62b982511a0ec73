"""Repository for OrderActivity entries."""

from ordering.activity.activity import OrderActivity
from ordering.domain import ordering
from ordering.utils.query import fetch_all


@ordering.repository(part_of=OrderActivity)
class OrderActivityRepository:
    def for_order(self, order_id) -> list[OrderActivity]:
        """Entries for one order, newest first."""
        return fetch_all(self._dao.query.filter(order_id=str(order_id)).order_by("-occurred_at"))

    def count_for(self, order_id, action=None) -> int:
        filters = {"order_id": str(order_id)}
        if action:
            filters["action"] = action
        return self._dao.query.filter(**filters).all().total

    def purge_order(self, order_id) -> int:
        entries = self.for_order(order_id)
        for entry in entries:
            self._dao.delete(entry)
        return len(entries)
