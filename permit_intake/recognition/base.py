from abc import ABC, abstractmethod
from collections.abc import Callable

ProgressCallback = Callable[[float], None]


class BaseRecognitionEngine(ABC):
    """Contract for text recognition over an uploaded binary."""

    @abstractmethod
    def recognize(
        self,
        payload: bytes,
        media_type: str,
        language: str,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Return the text recognized in ``payload``.

        Args:
            payload: Raw file content.
            media_type: Declared media type, e.g. ``image/png``.
            language: Tesseract language hint, e.g. ``spa``.
            on_progress: Receives fractional completion in ``[0, 1]``.

        Raises:
            RecognitionError: on engine failure or when no text is found.
        """
