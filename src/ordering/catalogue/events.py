"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductRegistered:
    """A product became known to the ordering domain."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    status = String(required=True)


@ordering.event(part_of="Product")
class StockWithdrawn:
    """Units left the stock ledger because an order was placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    withdrawn_at = DateTime(required=True)
