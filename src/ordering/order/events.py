"""Domain events for the Order aggregate.

``OrderPlaced`` drives the order-confirmation notification; it is handled
after the placing unit of work commits, so notification trouble can never
roll back an order.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer's cart was turned into a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    customer_name = String()
    customer_email = String()
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    tax = Float()
    shipping = Float()
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An operator set the order status (possibly to the same value)."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_by_name = String()
    note = Text()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class InvoiceNumberAssigned:
    """The first invoice render fixed the order's invoice number."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    invoice_number = String(required=True)
    assigned_at = DateTime(required=True)
