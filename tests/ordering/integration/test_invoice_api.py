"""Integration tests for the /invoices endpoints."""

import re

from ordering.invoice.pdf import get_pdf_engine

CUSTOMER = {"X-User-Id": "cust-001", "X-User-Role": "customer"}
OTHER_CUSTOMER = {"X-User-Id": "cust-999", "X-User-Role": "customer"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "admin"}


class TestInvoiceJson:
    def test_invoice(self, client, pending_order):
        response = client.get(f"/invoices/{pending_order.id}", headers=CUSTOMER)

        assert response.status_code == 200
        data = response.json()
        assert re.fullmatch(r"INV-\d+-\d{3}", data["invoice_number"])
        assert data["order"]["invoice_number"] == data["invoice_number"]
        assert data["invoice_number"] in data["html"]

    def test_same_number_on_every_request(self, client, pending_order):
        first = client.get(f"/invoices/{pending_order.id}", headers=CUSTOMER).json()["invoice_number"]
        second = client.get(f"/invoices/{pending_order.id}", headers=ADMIN).json()["invoice_number"]
        assert first == second

    def test_other_customer_is_forbidden(self, client, pending_order):
        response = client.get(f"/invoices/{pending_order.id}", headers=OTHER_CUSTOMER)
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_unknown_order(self, client):
        assert client.get("/invoices/no-such-order", headers=ADMIN).status_code == 404


class TestInvoiceHtml:
    def test_printable_html(self, client, pending_order):
        response = client.get(f"/invoices/{pending_order.id}/html", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "window.print()" in response.text


class TestInvoiceDownload:
    def test_pdf_attachment(self, client, pending_order):
        response = client.get(f"/invoices/{pending_order.id}/download", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert re.fullmatch(
            r'attachment; filename="invoice-INV-\d+-\d{3}\.pdf"',
            response.headers["content-disposition"],
        )
        assert response.content.startswith(b"%PDF")

    def test_html_attachment_when_engine_fails(self, client, pending_order):
        get_pdf_engine().configure(should_succeed=False)

        response = client.get(f"/invoices/{pending_order.id}/download", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["content-disposition"].endswith('.html"')
        assert "INVOICE" in response.text
