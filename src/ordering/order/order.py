"""Order aggregate (CQRS) — the core of the ordering domain.

An Order is built once, from a cart snapshot, and never accepts new line
items afterwards. Money (subtotal, tax, shipping, total) is fixed at
construction; only status, payment label, invoice number and approval stamp
change later.

State Machine:
    pending → approved → processing → shipped → delivered
    cancelled reachable from any non-terminal state

Re-asserting the current status is accepted (and still audited by the
activity ledger), so operators can annotate an order without moving it.
"""

import math
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.domain import ordering
from ordering.errors import InvalidStatusTransitionError
from ordering.order.events import InvoiceNumberAssigned, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    PAYPAL = "paypal"
    OTHER = "other"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# State machine transition map (self-transitions are added in _assert_can_transition)
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.APPROVED, OrderStatus.CANCELLED},
    OrderStatus.APPROVED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    """Map a raw status label to ``OrderStatus``, rejecting unknown labels."""
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Invalid status '{value}'. Must be one of: {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Address:
    """A shipping or billing address captured at placement time.

    Stored by value on the Order, so later edits to the customer's address
    book never rewrite historical orders.
    """

    full_name = String(max_length=255)
    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    phone = String(max_length=30)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """An immutable line: product reference, name snapshot, quantity and price."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    line_total = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=255)
    customer_email = String(max_length=255)
    items = HasMany(OrderItem)
    subtotal = Float(required=True, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    tax_identifier = String(max_length=50)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    notes = Text()
    invoice_number = String(max_length=50, unique=True)
    approved_by = Identifier()
    approved_by_name = String(max_length=255)
    approved_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_reconcile(self):
        if self.subtotal is None or self.total is None:
            return
        expected = self.subtotal + (self.tax or 0.0) + (self.shipping or 0.0)
        if not math.isclose(self.total, expected, abs_tol=0.005):
            raise ValidationError({"total": ["Total must equal subtotal + tax + shipping"]})

    @invariant.post
    def subtotal_must_match_items(self):
        if self.subtotal is None or not self.items:
            return
        items_total = sum(item.line_total for item in self.items)
        if not math.isclose(self.subtotal, items_total, abs_tol=0.005):
            raise ValidationError({"subtotal": ["Subtotal must equal the sum of line totals"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer_id,
        lines,
        shipping_address,
        billing_address=None,
        tax=0.0,
        shipping=0.0,
        customer_name=None,
        customer_email=None,
        tax_identifier=None,
        payment_method=None,
        notes=None,
    ):
        """Build a pending order from cart lines.

        Args:
            lines: Iterable of dicts with product_id, name, quantity, unit_price.
                   ``unit_price`` is the cart's snapshot price.
            shipping_address: Dict of address fields (line1 and city required).
            billing_address: Dict of address fields; defaults to none.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})
        if tax < 0:
            raise ValidationError({"tax": ["Tax cannot be negative"]})
        if shipping < 0:
            raise ValidationError({"shipping": ["Shipping charge cannot be negative"]})

        items = [
            OrderItem(
                product_id=str(line["product_id"]),
                name=line["name"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                line_total=round(line["unit_price"] * line["quantity"], 2),
            )
            for line in lines
        ]
        subtotal = round(sum(item.line_total for item in items), 2)
        total = round(subtotal + tax + shipping, 2)
        now = datetime.now(UTC)

        order = cls(
            order_number=order_number,
            customer_id=str(customer_id),
            customer_name=customer_name,
            customer_email=customer_email,
            items=items,
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            total=total,
            status=OrderStatus.PENDING.value,
            shipping_address=Address(**shipping_address),
            billing_address=Address(**billing_address) if billing_address else None,
            tax_identifier=tax_identifier,
            payment_method=payment_method or PaymentMethod.CASH.value,
            payment_status=PaymentStatus.PENDING.value,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                customer_id=str(customer_id),
                customer_name=customer_name,
                customer_email=customer_email,
                item_count=len(items),
                subtotal=subtotal,
                tax=tax,
                shipping=shipping,
                total=total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[OrderStatus(self.status)]

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        current = OrderStatus(self.status)
        return target_status == current or target_status in _VALID_TRANSITIONS[current]

    def _assert_can_transition(self, target_status: OrderStatus):
        if not self.can_transition_to(target_status):
            raise InvalidStatusTransitionError(self.status, target_status.value)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def change_status(self, new_status, changed_by, changed_by_name=None, note=None) -> str:
        """Move the order to ``new_status`` and return the previous status.

        Approval is stamped once: re-approving (or passing through approved
        again) never overwrites the original approver or timestamp.
        """
        target = parse_status(new_status)
        self._assert_can_transition(target)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.APPROVED and self.approved_at is None:
            self.approved_by = str(changed_by)
            self.approved_by_name = changed_by_name
            self.approved_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous_status,
                to_status=target.value,
                changed_by=str(changed_by),
                changed_by_name=changed_by_name,
                note=note,
                changed_at=now,
            )
        )
        return previous_status

    def assign_invoice_number(self, invoice_number: str) -> bool:
        """Set the invoice number once. Returns False when one was already assigned."""
        if self.invoice_number:
            return False

        self.invoice_number = invoice_number
        self.updated_at = datetime.now(UTC)

        self.raise_(
            InvoiceNumberAssigned(
                order_id=str(self.id),
                order_number=self.order_number,
                invoice_number=invoice_number,
                assigned_at=self.updated_at,
            )
        )
        return True

    @property
    def bill_to(self):
        return self.billing_address or self.shipping_address
