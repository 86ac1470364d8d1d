"""Recognition engine dispatching on the uploaded file's media type."""

from permit_intake.logging.logger import Log
from permit_intake.pdf.base import BasePdfExtractor
from permit_intake.pdf.exceptions import PdfExtractionError
from permit_intake.pdf.pymupdf_adapter import render_pdf_pages
from permit_intake.recognition.base import BaseRecognitionEngine, ProgressCallback
from permit_intake.recognition.exceptions import RecognitionError, UnsupportedDocumentError
from permit_intake.recognition.tesseract_adapter import TesseractAdapter

PDF_MEDIA_TYPE = "application/pdf"
IMAGE_MEDIA_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})


class DocumentRecognizer(BaseRecognitionEngine):
    """Images go through Tesseract; PDFs use their text layer first.

    A PDF with no extractable text is treated as a scan: its pages are
    rendered and OCR'd when ``ocr_fallback`` is enabled.
    """

    def __init__(
        self,
        *,
        tesseract: TesseractAdapter,
        pdf_extractor: BasePdfExtractor,
        ocr_fallback: bool = True,
        render_dpi: int = 200,
    ) -> None:
        self._tesseract = tesseract
        self._pdf_extractor = pdf_extractor
        self._ocr_fallback = ocr_fallback
        self._render_dpi = render_dpi

    def recognize(
        self,
        payload: bytes,
        media_type: str,
        language: str,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        report = on_progress or (lambda _fraction: None)
        report(0.0)

        if media_type == PDF_MEDIA_TYPE:
            text = self._recognize_pdf(payload, language, report)
        elif media_type in IMAGE_MEDIA_TYPES:
            image = self._tesseract.load_image(payload)
            report(0.1)
            text = self._tesseract.image_to_text(image, language)
        else:
            raise UnsupportedDocumentError(f"cannot recognize media type '{media_type}'")

        report(1.0)
        text = text.strip()
        if not text:
            raise RecognitionError("no text recognized")
        return text

    def _recognize_pdf(self, payload: bytes, language: str, report: ProgressCallback) -> str:
        try:
            text = self._pdf_extractor.extract(
                payload,
                on_page=lambda done, total: report(0.5 * done / total),
            )
        except PdfExtractionError as exc:
            raise RecognitionError(str(exc)) from exc

        if text or not self._ocr_fallback:
            return text

        Log.info("PDF has no text layer, running OCR on rendered pages")
        try:
            pages = render_pdf_pages(payload, dpi=self._render_dpi)
        except PdfExtractionError as exc:
            raise RecognitionError(str(exc)) from exc

        texts: list[str] = []
        for index, image in enumerate(pages, start=1):
            texts.append(self._tesseract.image_to_text(image, language))
            report(0.5 + 0.5 * index / len(pages))
        return "\n".join(texts)
