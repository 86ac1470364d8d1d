class IntakeError(Exception):
    """Base exception for document intake errors."""


class UnsupportedMediaTypeError(IntakeError):
    """Raised when an uploaded file is not a JPEG, PNG, WEBP image or a PDF."""


class FileTooLargeError(IntakeError):
    """Raised when an uploaded file exceeds the size limit."""


class ItemNotFoundError(IntakeError):
    """Raised when an item id is not in the session."""


class InvalidTransitionError(IntakeError):
    """Raised when an action is not allowed from the item's current status."""


class ConfirmationError(IntakeError):
    """Raised when a confirmed permit could not be persisted."""


class CorrectionError(IntakeError):
    """Raised for an invalid choice on the correction form."""
