"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.errors import NotFoundError
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def fetch(self, order_id) -> Order:
        """Load an order, raising ``NotFoundError`` when it does not exist."""
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise NotFoundError("Order", str(order_id)) from None

    def find_by_number(self, order_number: str) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all().items
        return results[0] if results else None

    def page(self, customer_id=None, status=None, page=1, limit=10) -> tuple[list[Order], int]:
        """Return one page of orders, newest first, and the total match count."""
        filters = {}
        if customer_id:
            filters["customer_id"] = str(customer_id)
        if status:
            filters["status"] = status

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        total = query.all().total
        items = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all().items
        return items, total
