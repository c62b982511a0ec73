"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart or merged into an existing line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # line quantity after the add
    unit_price = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed, either by the customer or by order placement."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    reason = String(max_length=50)
