class RecognitionError(Exception):
    """Raised when the recognition engine fails or returns no text."""


class UnsupportedDocumentError(RecognitionError):
    """Raised for media types the recognizer cannot read."""
