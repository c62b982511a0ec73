"""Fake PDF engine — records rendered documents for testing."""

from ordering.errors import RenderingFailure
from ordering.invoice.pdf.port import PdfEngine


class FakePdfEngine(PdfEngine):
    """Engine that wraps the HTML in a minimal PDF envelope and keeps a copy."""

    name = "fake"

    def __init__(self):
        self.rendered: list[str] = []
        self.should_succeed = True
        self.failure_reason = "PDF engine unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "PDF engine unavailable"):
        """Configure the fake engine behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def render(self, html: str) -> bytes:
        if not self.should_succeed:
            raise RenderingFailure(self.name, self.failure_reason)

        self.rendered.append(html)
        return b"%PDF-1.4\n% fake invoice\n" + html.encode("utf-8") + b"\n%%EOF\n"

    def reset(self):
        """Clear rendered documents (useful between tests)."""
        self.rendered.clear()
        self.should_succeed = True
        self.failure_reason = "PDF engine unavailable"
