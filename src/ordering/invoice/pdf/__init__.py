"""PDF engine registry — pluggable HTML-to-PDF conversion for invoices.

Uses the fake engine by default. Set INVOICE_PDF_ENGINE=weasyprint (and
install the ``pdf`` extra) to produce real documents.
"""

from ordering.config import get_settings
from ordering.errors import RenderingFailure

_engine_instance = None


def get_pdf_engine():
    """Return the configured PDF engine (singleton)."""
    global _engine_instance
    if _engine_instance is None:
        engine = get_settings().invoice_pdf_engine
        if engine == "fake":
            from ordering.invoice.pdf.fake_engine import FakePdfEngine

            _engine_instance = FakePdfEngine()
        elif engine == "weasyprint":
            from ordering.invoice.pdf.weasyprint_engine import WeasyPrintEngine

            _engine_instance = WeasyPrintEngine()
        else:
            raise RenderingFailure(engine, "unknown PDF engine")
    return _engine_instance


def reset_pdf_engine():
    """Reset the engine singleton (useful for testing)."""
    global _engine_instance
    _engine_instance = None
