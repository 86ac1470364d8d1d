from permit_intake.intake.exceptions import FileTooLargeError, UnsupportedMediaTypeError
from permit_intake.intake.models import IntakeFile

ACCEPTED_MEDIA_TYPES: dict[str, tuple[str, ...]] = {
    "image/jpeg": (".jpeg", ".jpg"),
    "image/png": (".png",),
    "image/webp": (".webp",),
    "application/pdf": (".pdf",),
}

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def validate_upload(file: IntakeFile, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
    """Reject files the intake pipeline does not accept.

    Raises:
        UnsupportedMediaTypeError: unknown media type or mismatching extension.
        FileTooLargeError: payload larger than ``max_bytes``.
    """
    extensions = ACCEPTED_MEDIA_TYPES.get(file.media_type)
    if extensions is None:
        raise UnsupportedMediaTypeError(
            f"{file.name}: media type '{file.media_type}' is not accepted"
        )
    if not file.name.lower().endswith(extensions):
        raise UnsupportedMediaTypeError(
            f"{file.name}: extension does not match media type '{file.media_type}'"
        )
    if file.size > max_bytes:
        raise FileTooLargeError(
            f"{file.name}: {file.size} bytes exceeds the {max_bytes} byte limit"
        )
