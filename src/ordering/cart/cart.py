"""Shopping Cart aggregate (CQRS) — one mutable cart per customer.

Each line captures the product's price at the moment it was added (the
snapshot price). Order placement totals are computed from these snapshots,
so a later catalogue price change does not affect a line until the line is
touched again. Adding a product already in the cart merges into the existing
line and refreshes its snapshot.

Carts are created lazily and cleared, never deleted, when an order is placed.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from ordering.errors import NotFoundError


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    added_at = DateTime()

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def subtotal(self) -> float:
        return round(sum(item.unit_price * item.quantity for item in self.items), 2)

    def item_for(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _require_item(self, product_id) -> CartItem:
        item = self.item_for(product_id)
        if item is None:
            raise NotFoundError("Cart item", str(product_id))
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, product_name, unit_price, quantity=1):
        """Add a product, or merge into its existing line by incrementing quantity."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.item_for(product_id)
        if existing:
            existing.quantity += quantity
            existing.unit_price = unit_price
            existing.product_name = product_name
            new_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    product_name=product_name,
                    quantity=quantity,
                    unit_price=unit_price,
                    added_at=now,
                )
            )
            new_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=new_quantity,
                unit_price=unit_price,
            )
        )

    def update_item_quantity(self, product_id, new_quantity, unit_price=None):
        """Set a line's quantity. Passing ``unit_price`` refreshes the snapshot."""
        if new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self._require_item(product_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        if unit_price is not None:
            item.unit_price = unit_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        item = self._require_item(product_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self, reason="customer"):
        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_count=item_count,
                reason=reason,
            )
        )
