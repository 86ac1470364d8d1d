import pymupdf
from PIL import Image

from permit_intake.pdf.base import BasePdfExtractor, PageCallback
from permit_intake.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes, on_page: PageCallback | None = None) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                total = doc.page_count
                pages: list[str] = []
                for index, page in enumerate(doc, start=1):
                    pages.append(page.get_text())
                    if on_page is not None:
                        on_page(index, total)
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc


def render_pdf_pages(pdf_bytes: bytes, dpi: int = 200) -> list[Image.Image]:
    """Rasterize every page so scanned PDFs can go through OCR.

    Raises:
        PdfExtractionError: if the PDF cannot be opened or rendered.
    """
    try:
        images: list[Image.Image] = []
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                pixmap = page.get_pixmap(dpi=dpi)
                images.append(
                    Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
                )
        return images
    except Exception as exc:
        raise PdfExtractionError(f"pymupdf rendering failed: {exc}") from exc
