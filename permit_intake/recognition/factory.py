from permit_intake.config.settings import Settings
from permit_intake.pdf.base import BasePdfExtractor
from permit_intake.pdf.pdfplumber_adapter import PdfPlumberAdapter
from permit_intake.pdf.pymupdf_adapter import PyMuPdfAdapter
from permit_intake.recognition.base import BaseRecognitionEngine
from permit_intake.recognition.recognizer import DocumentRecognizer
from permit_intake.recognition.tesseract_adapter import TesseractAdapter


class RecognitionEngineFactory:
    """Builds the recognition engine from settings."""

    PDF_EXTRACTORS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseRecognitionEngine:
        return DocumentRecognizer(
            tesseract=TesseractAdapter(tesseract_cmd=settings.tesseract_cmd),
            pdf_extractor=cls.create_pdf_extractor(settings.pdf_engine),
            ocr_fallback=settings.pdf_ocr_fallback,
            render_dpi=settings.pdf_ocr_dpi,
        )

    @classmethod
    def create_pdf_extractor(cls, engine: str) -> BasePdfExtractor:
        adapter_cls = cls.PDF_EXTRACTORS.get(engine.lower())
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine.lower()}'. Choose from: {list(cls.PDF_EXTRACTORS)}"
            )
        return adapter_cls()
