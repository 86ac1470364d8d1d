import pytest

from permit_intake.pdf.exceptions import PdfExtractionError
from permit_intake.pdf.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(sample_pdf_bytes)
        assert isinstance(result, str)
        assert "Patente Municipal" in result

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(multi_page_pdf_bytes)
        assert "Certificado de Bomberos" in result
        assert "15-03-2026" in result

    def test_reports_each_page(self, multi_page_pdf_bytes: bytes) -> None:
        calls: list[tuple[int, int]] = []
        PdfPlumberAdapter().extract(multi_page_pdf_bytes, on_page=lambda d, t: calls.append((d, t)))
        assert calls == [(1, 2), (2, 2)]

    def test_extract_empty_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(empty_pdf_bytes)
        assert result == ""

    def test_extract_raises_on_invalid_bytes(self) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(PdfExtractionError):
            adapter.extract(b"not a pdf")
