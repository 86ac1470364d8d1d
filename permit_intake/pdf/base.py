from abc import ABC, abstractmethod
from collections.abc import Callable

PageCallback = Callable[[int, int], None]


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes, on_page: PageCallback | None = None) -> str:
        """Extract the text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.
            on_page: Called as ``on_page(done, total)`` after each page.

        Returns:
            Page texts joined by newlines, stripped. Empty for scanned PDFs
            without a text layer.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
