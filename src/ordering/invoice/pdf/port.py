"""PDF engine port — abstract interface for HTML-to-PDF conversion."""

from abc import ABC, abstractmethod


class PdfEngine(ABC):
    """Abstract interface for PDF engines."""

    name = "abstract"

    @abstractmethod
    def render(self, html: str) -> bytes:
        """Convert an HTML document to PDF bytes.

        Raises:
            RenderingFailure: when the document cannot be produced.
        """
        ...
