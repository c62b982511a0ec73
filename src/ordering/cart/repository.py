"""Repository for the ShoppingCart aggregate."""

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_by_customer(self, customer_id) -> ShoppingCart | None:
        results = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return results[0] if results else None

    def for_customer(self, customer_id) -> ShoppingCart:
        """Return the customer's cart, creating (but not persisting) an empty one if needed."""
        return self.find_by_customer(customer_id) or ShoppingCart.create(customer_id=str(customer_id))
