import io

import pdfplumber

from permit_intake.pdf.base import BasePdfExtractor, PageCallback
from permit_intake.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes, on_page: PageCallback | None = None) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                total = len(pdf.pages)
                pages: list[str] = []
                for index, page in enumerate(pdf.pages, start=1):
                    pages.append(page.extract_text() or "")
                    if on_page is not None:
                        on_page(index, total)
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
