class PdfExtractionError(Exception):
    """Raised when a PDF cannot be opened, read or rendered."""
