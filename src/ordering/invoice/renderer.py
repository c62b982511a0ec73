"""Invoice rendering.

``render_invoice`` is a read with one side effect: the first render of an
order assigns and persists its invoice number (``AssignInvoiceNumber``);
every later render reuses it.

``render_html`` is a pure function of the order snapshot and the settings
passed to it. The PDF is derived from that HTML by the configured engine on a
best-effort basis: an engine failure (or an unknown engine name) is logged and
the document comes back without PDF bytes, so callers serve the HTML instead.
"""

from dataclasses import dataclass

import structlog
from jinja2.sandbox import SandboxedEnvironment
from protean.utils.globals import current_domain

from ordering.access import Requester, require_access
from ordering.config import Settings, get_settings
from ordering.errors import RenderingFailure
from ordering.invoice.pdf import get_pdf_engine
from ordering.invoice.template import INVOICE_TEMPLATE
from ordering.order.invoicing import AssignInvoiceNumber
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@dataclass
class InvoiceDocument:
    order: Order
    html: str
    pdf_bytes: bytes | None = None

    @property
    def invoice_number(self) -> str:
        return self.order.invoice_number

    @property
    def filename_stem(self) -> str:
        return f"invoice-{self.invoice_number}"


def _environment(currency_symbol: str) -> SandboxedEnvironment:
    env = SandboxedEnvironment(trim_blocks=True, lstrip_blocks=True, autoescape=True)
    env.filters["money"] = lambda value: f"{currency_symbol}{(value or 0.0):.2f}"
    return env


def _address_lines(address) -> list[str]:
    if address is None:
        return []
    lines = [address.line1]
    if address.line2:
        lines.append(address.line2)
    locality = " ".join(part for part in (address.state, address.postal_code) if part)
    lines.append(f"{address.city}, {locality}" if locality else address.city)
    if address.country:
        lines.append(address.country)
    return lines


def invoice_context(order: Order, settings: Settings) -> dict:
    invoice_at = order.approved_at or order.created_at
    return {
        "store_name": settings.store_name,
        "invoice_number": order.invoice_number or "",
        "invoice_date": f"{invoice_at:%B} {invoice_at.day}, {invoice_at.year}" if invoice_at else "",
        "customer_label": order.customer_name or order.customer_email or str(order.customer_id),
        "customer_email": order.customer_email,
        "bill_to": _address_lines(order.bill_to),
        "ship_to": _address_lines(order.shipping_address),
        "tax_identifier": order.tax_identifier,
        "order_number": order.order_number,
        "status": order.status,
        "payment_method": order.payment_method,
        "approved_by_name": order.approved_by_name,
        "items": [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "line_total": item.line_total,
            }
            for item in order.items
        ],
        "subtotal": order.subtotal,
        "tax": order.tax or 0.0,
        "shipping": order.shipping or 0.0,
        "total": order.total,
        "notes": order.notes,
    }


def render_html(order: Order, printable: bool = False, settings: Settings | None = None) -> str:
    """Render the invoice HTML for an order that already carries an invoice number.

    Store name and currency come from ``settings`` (the built-in defaults when
    omitted), never from the environment.
    """
    settings = settings or Settings()
    env = _environment(settings.currency_symbol)
    return env.from_string(INVOICE_TEMPLATE).render(printable=printable, **invoice_context(order, settings))


def render_pdf(html: str) -> bytes | None:
    try:
        return get_pdf_engine().render(html)
    except RenderingFailure as exc:
        logger.warning("PDF rendering failed, falling back to HTML", engine=exc.engine, reason=exc.reason)
        return None


def render_invoice(order_id, requester: Requester, include_pdf: bool = False, printable: bool = False) -> InvoiceDocument:
    repo = current_domain.repository_for(Order)
    order = repo.fetch(order_id)
    require_access(requester, order.customer_id)

    if not order.invoice_number:
        current_domain.process(AssignInvoiceNumber(order_id=str(order.id)), asynchronous=False)
        order = repo.fetch(order.id)

    html = render_html(order, printable=printable, settings=get_settings())
    pdf_bytes = render_pdf(html) if include_pdf else None
    return InvoiceDocument(order=order, html=html, pdf_bytes=pdf_bytes)
