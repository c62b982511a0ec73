"""Product aggregate — the slice of the catalogue the ordering core depends on.

Only sellability and stock matter here. Stock is a single non-negative
integer per product; it is decremented at order placement and never
incremented by this domain (restocking belongs to the catalogue owners).
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String

from ordering.catalogue.events import ProductRegistered, StockWithdrawn
from ordering.domain import ordering
from ordering.errors import InsufficientStockError, ProductUnavailableError


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    sku = String(max_length=50)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0)
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def register(cls, name, price, stock=0, sku=None, status=ProductStatus.ACTIVE.value, product_id=None):
        now = datetime.now(UTC)
        kwargs = {"id": product_id} if product_id else {}
        product = cls(
            name=name,
            sku=sku,
            price=price,
            stock=stock,
            status=status,
            created_at=now,
            updated_at=now,
            **kwargs,
        )
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                status=status,
            )
        )
        return product

    @property
    def is_sellable(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    def ensure_can_fulfil(self, quantity: int) -> None:
        """Raise unless the product is sellable with at least ``quantity`` units on hand."""
        if not self.is_sellable:
            raise ProductUnavailableError(self.name)
        if (self.stock or 0) < quantity:
            raise InsufficientStockError(self.name, self.stock or 0, quantity)

    def withdraw_stock(self, quantity: int, order_id: str) -> None:
        """Conditionally decrement stock: rejected when fewer than ``quantity`` units remain."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.ensure_can_fulfil(quantity)

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                withdrawn_at=self.updated_at,
            )
        )

    def reprice(self, price: float) -> None:
        if price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        self.price = price
        self.updated_at = datetime.now(UTC)

    def change_status(self, status: str) -> None:
        self.status = ProductStatus(status).value
        self.updated_at = datetime.now(UTC)
