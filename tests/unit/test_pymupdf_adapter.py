import pytest

from permit_intake.pdf.exceptions import PdfExtractionError
from permit_intake.pdf.pymupdf_adapter import PyMuPdfAdapter, render_pdf_pages


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_bytes)
        assert "Patente Municipal" in result

    def test_reports_each_page(self, multi_page_pdf_bytes: bytes) -> None:
        calls: list[tuple[int, int]] = []
        PyMuPdfAdapter().extract(multi_page_pdf_bytes, on_page=lambda d, t: calls.append((d, t)))
        assert calls == [(1, 2), (2, 2)]

    def test_extract_empty_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        assert PyMuPdfAdapter().extract(empty_pdf_bytes) == ""

    def test_extract_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError):
            PyMuPdfAdapter().extract(b"not a pdf")


class TestRenderPdfPages:
    def test_renders_one_image_per_page(self, multi_page_pdf_bytes: bytes) -> None:
        images = render_pdf_pages(multi_page_pdf_bytes, dpi=36)
        assert len(images) == 2
        assert images[0].mode == "RGB"
        assert images[0].width > 0

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError):
            render_pdf_pages(b"not a pdf")
