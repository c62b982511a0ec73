"""Tests for the invoice HTML rendered from an order snapshot."""

from datetime import UTC, datetime

from ordering.config import Settings
from ordering.invoice.renderer import InvoiceDocument, render_html
from ordering.order.order import Order

SHIP_TO = {"full_name": "Asha Rao", "line1": "12 MG Road", "city": "Bengaluru", "state": "KA", "postal_code": "560001"}


def _order(tax=0.0, shipping=0.0, billing_address=None, **kwargs):
    order = Order.place(
        order_number="ORD-1700000000000-000001",
        customer_id="cust-001",
        customer_name="Asha Rao",
        customer_email="asha@example.com",
        lines=[
            {"product_id": "prod-a", "name": "Widget", "quantity": 2, "unit_price": 10.0},
            {"product_id": "prod-b", "name": "Gadget", "quantity": 1, "unit_price": 4.5},
        ],
        shipping_address=SHIP_TO,
        billing_address=billing_address,
        tax=tax,
        shipping=shipping,
        **kwargs,
    )
    order.assign_invoice_number("INV-1700000000000-042")
    order.created_at = datetime(2024, 3, 5, 10, 30, tzinfo=UTC)
    return order


class TestInvoiceContent:
    def test_header_and_numbers(self):
        html = render_html(_order())
        assert "Invoice #INV-1700000000000-042" in html
        assert "ORD-1700000000000-000001" in html
        assert "ShopStream" in html
        assert "Date: March 5, 2024" in html

    def test_lines_and_totals(self):
        html = render_html(_order())
        assert "Widget" in html
        assert "$20.00" in html
        assert "$4.50" in html
        assert "$24.50" in html

    def test_zero_tax_and_shipping_rows_are_hidden(self):
        html = render_html(_order())
        assert "Tax:" not in html
        assert "Shipping:" not in html

    def test_positive_tax_and_shipping_rows_are_shown(self):
        html = render_html(_order(tax=1.5, shipping=5.0))
        assert "<span>Tax:</span><span>$1.50</span>" in html
        assert "<span>Shipping:</span><span>$5.00</span>" in html
        assert "$31.00" in html

    def test_status_and_payment_are_upper_cased(self):
        html = render_html(_order(payment_method="card"))
        assert "PENDING" in html
        assert "CARD" in html

    def test_bill_to_falls_back_to_shipping_address(self):
        html = render_html(_order())
        bill_to = html.split("<h3>Bill To</h3>")[1].split("</div>")[0]
        assert "12 MG Road" in bill_to

    def test_separate_billing_address(self):
        html = render_html(_order(billing_address={"line1": "7 Park Street", "city": "Kolkata"}))
        bill_to = html.split("<h3>Bill To</h3>")[1].split("</div>")[0]
        assert "7 Park Street" in bill_to
        assert "12 MG Road" not in bill_to

    def test_invoice_date_prefers_approval(self):
        order = _order()
        order.approved_at = datetime(2024, 4, 1, tzinfo=UTC)
        order.approved_by_name = "Ops Admin"
        html = render_html(order)
        assert "Date: April 1, 2024" in html
        assert "Approved by:</strong> Ops Admin" in html

    def test_tax_identifier_and_notes(self):
        html = render_html(_order(tax_identifier="29ABCDE1234F1Z5", notes="Leave at the door"))
        assert "29ABCDE1234F1Z5" in html
        assert "Leave at the door" in html

    def test_customer_text_is_escaped(self):
        html = render_html(_order(notes="<script>alert(1)</script>"))
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_print_button_only_when_printable(self):
        order = _order()
        assert "window.print()" not in render_html(order)
        assert "window.print()" in render_html(order, printable=True)


class TestInvoiceDocument:
    def test_filename_stem(self):
        document = InvoiceDocument(order=_order(), html="<html></html>")
        assert document.invoice_number == "INV-1700000000000-042"
        assert document.filename_stem == "invoice-INV-1700000000000-042"
        assert document.pdf_bytes is None


class TestInvoiceSettings:
    def test_explicit_settings(self):
        html = render_html(_order(), settings=Settings(store_name="Corner Shop", currency_symbol="Rs."))
        assert "Corner Shop" in html
        assert "Rs.24.50" in html

    def test_environment_is_not_consulted(self, monkeypatch):
        monkeypatch.setenv("STORE_NAME", "Corner Shop")
        monkeypatch.setenv("INVOICE_CURRENCY_SYMBOL", "Rs.")

        html = render_html(_order())

        assert "ShopStream" in html
        assert "Corner Shop" not in html
        assert "$24.50" in html
