import io

import pytesseract
from PIL import Image

from permit_intake.recognition.exceptions import RecognitionError


class TesseractAdapter:
    """Runs Tesseract OCR over PIL images."""

    def __init__(self, tesseract_cmd: str = "", psm: int = 3) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self._config = f"--oem 3 --psm {psm}"

    def image_to_text(self, image: Image.Image, language: str) -> str:
        try:
            return pytesseract.image_to_string(image, lang=language, config=self._config)
        except Exception as exc:
            raise RecognitionError(f"tesseract failed: {exc}") from exc

    @staticmethod
    def load_image(payload: bytes) -> Image.Image:
        """Decode image bytes into an RGB (or greyscale) PIL image."""
        try:
            image = Image.open(io.BytesIO(payload))
            image.load()
        except Exception as exc:
            raise RecognitionError(f"cannot decode image: {exc}") from exc
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        return image
