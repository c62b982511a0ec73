"""WeasyPrint PDF engine.

WeasyPrint is an optional dependency (the ``pdf`` extra). It is imported when
a document is rendered, so a deployment without it still serves HTML
invoices through the fallback path.
"""

from ordering.errors import RenderingFailure
from ordering.invoice.pdf.port import PdfEngine


class WeasyPrintEngine(PdfEngine):
    name = "weasyprint"

    def render(self, html: str) -> bytes:
        try:
            from weasyprint import HTML
        except ImportError as exc:
            raise RenderingFailure(self.name, f"weasyprint is not installed ({exc})") from exc

        try:
            return HTML(string=html).write_pdf()
        except Exception as exc:
            raise RenderingFailure(self.name, str(exc)) from exc
