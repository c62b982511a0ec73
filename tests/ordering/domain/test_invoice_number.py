"""Tests for invoice number assignment on the Order aggregate and number formats."""

import re

from ordering.order.events import InvoiceNumberAssigned
from ordering.order.numbering import format_invoice_number, format_order_number
from ordering.order.order import Order


def _make_order():
    order = Order.place(
        order_number="ORD-1700000000000-000001",
        customer_id="cust-001",
        lines=[{"product_id": "prod-a", "name": "Widget", "quantity": 1, "unit_price": 5.0}],
        shipping_address={"line1": "1 St", "city": "C"},
    )
    order._events.clear()
    return order


class TestInvoiceNumberAssignment:
    def test_first_assignment(self):
        order = _make_order()
        assert order.assign_invoice_number("INV-1700000000000-042") is True
        assert order.invoice_number == "INV-1700000000000-042"
        assert isinstance(order._events[0], InvoiceNumberAssigned)

    def test_second_assignment_is_ignored(self):
        order = _make_order()
        order.assign_invoice_number("INV-1700000000000-042")
        order._events.clear()

        assert order.assign_invoice_number("INV-1700000000001-007") is False
        assert order.invoice_number == "INV-1700000000000-042"
        assert order._events == []


class TestNumberFormats:
    def test_order_number_format(self):
        assert format_order_number(1700000000000, 7) == "ORD-1700000000000-000007"

    def test_invoice_number_format(self):
        number = format_invoice_number(1700000000000, 5)
        assert number == "INV-1700000000000-005"
        assert re.fullmatch(r"INV-\d+-\d{3}", number)
