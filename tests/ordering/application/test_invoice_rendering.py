"""Application tests for invoice rendering and invoice number assignment."""

import re

import pytest
from ordering.access import Requester, Role
from ordering.errors import AuthorizationError, NotFoundError
from ordering.invoice.pdf import get_pdf_engine
from ordering.invoice.renderer import render_invoice
from ordering.order.invoicing import AssignInvoiceNumber
from ordering.order.order import Order
from protean.utils.globals import current_domain

OWNER = Requester("cust-001", Role.CUSTOMER, name="Asha Rao")
ADMIN = Requester("admin-1", Role.ADMIN)


class TestInvoiceNumber:
    def test_first_render_assigns_a_number(self, pending_order):
        document = render_invoice(pending_order.id, OWNER)

        assert re.fullmatch(r"INV-\d+-\d{3}", document.invoice_number)
        stored = current_domain.repository_for(Order).get(pending_order.id)
        assert stored.invoice_number == document.invoice_number

    def test_number_is_stable_across_renders(self, pending_order):
        first = render_invoice(pending_order.id, OWNER)
        second = render_invoice(pending_order.id, ADMIN)

        assert first.invoice_number == second.invoice_number
        assert first.html == second.html

    def test_assignment_command_is_idempotent(self, pending_order):
        command = AssignInvoiceNumber(order_id=pending_order.id)
        first = current_domain.process(command, asynchronous=False)
        second = current_domain.process(AssignInvoiceNumber(order_id=pending_order.id), asynchronous=False)
        assert first == second

    def test_rendering_does_not_depend_on_status(self, pending_order):
        document = render_invoice(pending_order.id, OWNER)
        assert "PENDING" in document.html


class TestInvoiceAccess:
    def test_other_customer_is_refused(self, pending_order):
        with pytest.raises(AuthorizationError):
            render_invoice(pending_order.id, Requester("cust-999"))

        assert current_domain.repository_for(Order).get(pending_order.id).invoice_number is None

    def test_admin_may_render_any_invoice(self, pending_order):
        document = render_invoice(pending_order.id, ADMIN)
        assert document.order.customer_id == "cust-001"

    def test_missing_order(self):
        with pytest.raises(NotFoundError):
            render_invoice("no-such-order", ADMIN)


class TestInvoicePdf:
    def test_pdf_bytes_from_engine(self, pending_order):
        document = render_invoice(pending_order.id, OWNER, include_pdf=True)

        assert document.pdf_bytes.startswith(b"%PDF")
        assert get_pdf_engine().rendered == [document.html]

    def test_html_only_unless_requested(self, pending_order):
        document = render_invoice(pending_order.id, OWNER)
        assert document.pdf_bytes is None
        assert get_pdf_engine().rendered == []

    def test_engine_failure_falls_back_to_html(self, pending_order):
        get_pdf_engine().configure(should_succeed=False)

        document = render_invoice(pending_order.id, OWNER, include_pdf=True)

        assert document.pdf_bytes is None
        assert document.invoice_number in document.html

    def test_unknown_engine_falls_back_to_html(self, monkeypatch, pending_order):
        monkeypatch.setenv("INVOICE_PDF_ENGINE", "no-such-engine")

        document = render_invoice(pending_order.id, OWNER, include_pdf=True)

        assert document.pdf_bytes is None
        assert document.invoice_number in document.html


class TestInvoiceSettings:
    def test_store_and_currency_come_from_settings(self, monkeypatch, pending_order):
        monkeypatch.setenv("STORE_NAME", "Corner Shop")
        monkeypatch.setenv("INVOICE_CURRENCY_SYMBOL", "Rs.")

        html = render_invoice(pending_order.id, OWNER).html

        assert "Corner Shop" in html
        assert "Rs.20.00" in html
