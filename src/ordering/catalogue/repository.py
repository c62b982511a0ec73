"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import NotFoundError


@ordering.repository(part_of=Product)
class ProductRepository:
    def fetch(self, product_id) -> Product:
        """Load a product, raising ``NotFoundError`` when it does not exist."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            raise NotFoundError("Product", str(product_id)) from None

    def find(self, product_id) -> Product | None:
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None
