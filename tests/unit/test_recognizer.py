from unittest.mock import MagicMock, patch

import pytest

from permit_intake.pdf.exceptions import PdfExtractionError
from permit_intake.recognition.exceptions import RecognitionError, UnsupportedDocumentError
from permit_intake.recognition.recognizer import DocumentRecognizer


def _make_recognizer(
    pdf_text: str = "", ocr_fallback: bool = True
) -> tuple[DocumentRecognizer, MagicMock, MagicMock]:
    mock_tesseract = MagicMock()
    mock_tesseract.image_to_text.return_value = "Resolución Sanitaria"
    mock_extractor = MagicMock()

    def _extract(payload: bytes, on_page=None):  # type: ignore[no-untyped-def]
        if on_page is not None:
            on_page(1, 2)
            on_page(2, 2)
        return pdf_text

    mock_extractor.extract.side_effect = _extract
    recognizer = DocumentRecognizer(
        tesseract=mock_tesseract,
        pdf_extractor=mock_extractor,
        ocr_fallback=ocr_fallback,
        render_dpi=72,
    )
    return recognizer, mock_tesseract, mock_extractor


class TestImages:
    def test_runs_tesseract(self) -> None:
        recognizer, mock_tesseract, mock_extractor = _make_recognizer()

        result = recognizer.recognize(b"png", "image/png", "spa")

        assert result == "Resolución Sanitaria"
        mock_tesseract.load_image.assert_called_once_with(b"png")
        mock_tesseract.image_to_text.assert_called_once_with(
            mock_tesseract.load_image.return_value, "spa"
        )
        mock_extractor.extract.assert_not_called()

    def test_reports_start_and_end(self) -> None:
        recognizer, _tesseract, _extractor = _make_recognizer()
        progress: list[float] = []

        recognizer.recognize(b"jpg", "image/jpeg", "spa", progress.append)

        assert progress[0] == 0.0
        assert progress[-1] == 1.0

    def test_blank_output_raises(self) -> None:
        recognizer, mock_tesseract, _extractor = _make_recognizer()
        mock_tesseract.image_to_text.return_value = "  \n "

        with pytest.raises(RecognitionError, match="no text recognized"):
            recognizer.recognize(b"png", "image/png", "spa")


class TestPdfTextLayer:
    def test_uses_text_layer(self) -> None:
        recognizer, mock_tesseract, _extractor = _make_recognizer(pdf_text="Patente Municipal")

        result = recognizer.recognize(b"%PDF", "application/pdf", "spa")

        assert result == "Patente Municipal"
        mock_tesseract.image_to_text.assert_not_called()

    def test_maps_page_progress_to_first_half(self) -> None:
        recognizer, _tesseract, _extractor = _make_recognizer(pdf_text="Patente Municipal")
        progress: list[float] = []

        recognizer.recognize(b"%PDF", "application/pdf", "spa", progress.append)

        assert progress == [0.0, 0.25, 0.5, 1.0]

    def test_wraps_extraction_errors(self) -> None:
        recognizer, _tesseract, mock_extractor = _make_recognizer()
        mock_extractor.extract.side_effect = PdfExtractionError("broken")

        with pytest.raises(RecognitionError, match="broken"):
            recognizer.recognize(b"%PDF", "application/pdf", "spa")


class TestPdfOcrFallback:
    @patch("permit_intake.recognition.recognizer.render_pdf_pages")
    def test_ocrs_rendered_pages_when_text_layer_empty(self, mock_render: MagicMock) -> None:
        recognizer, mock_tesseract, _extractor = _make_recognizer(pdf_text="")
        mock_render.return_value = ["page-1", "page-2"]
        progress: list[float] = []

        result = recognizer.recognize(b"%PDF", "application/pdf", "spa", progress.append)

        assert result == "Resolución Sanitaria\nResolución Sanitaria"
        mock_render.assert_called_once_with(b"%PDF", dpi=72)
        assert mock_tesseract.image_to_text.call_count == 2
        assert progress == [0.0, 0.25, 0.5, 0.75, 1.0, 1.0]

    @patch("permit_intake.recognition.recognizer.render_pdf_pages")
    def test_disabled_fallback_fails_on_scans(self, mock_render: MagicMock) -> None:
        recognizer, _tesseract, _extractor = _make_recognizer(pdf_text="", ocr_fallback=False)

        with pytest.raises(RecognitionError, match="no text recognized"):
            recognizer.recognize(b"%PDF", "application/pdf", "spa")
        mock_render.assert_not_called()

    @patch("permit_intake.recognition.recognizer.render_pdf_pages")
    def test_wraps_render_errors(self, mock_render: MagicMock) -> None:
        recognizer, _tesseract, _extractor = _make_recognizer(pdf_text="")
        mock_render.side_effect = PdfExtractionError("cannot render")

        with pytest.raises(RecognitionError, match="cannot render"):
            recognizer.recognize(b"%PDF", "application/pdf", "spa")


class TestUnsupported:
    def test_rejects_other_media_types(self) -> None:
        recognizer, _tesseract, _extractor = _make_recognizer()

        with pytest.raises(UnsupportedDocumentError):
            recognizer.recognize(b"GIF89a", "image/gif", "spa")
