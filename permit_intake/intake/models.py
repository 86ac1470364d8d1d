from dataclasses import dataclass
from datetime import date
from enum import Enum

from permit_intake.classification.models import DetectedPermit

ERROR_UPLOAD_FAILED = "upload failed"
ERROR_PROCESSING_FAILED = "processing failed"
ERROR_TYPE_NOT_DETECTED = "type not detected"

PROGRESS_UPLOAD_STARTED = 10
PROGRESS_UPLOADED = 20
PROGRESS_RECOGNITION_START = 30
PROGRESS_RECOGNITION_END = 80
PROGRESS_DONE = 100


class UploadStatus(str, Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    DETECTED = "detected"
    ERROR = "error"
    CONFIRMED = "confirmed"


def recognition_progress(fraction: float) -> int:
    """Map engine completion in [0, 1] onto the 30-80 band of the item's progress."""
    fraction = max(0.0, min(1.0, fraction))
    span = PROGRESS_RECOGNITION_END - PROGRESS_RECOGNITION_START
    return round(PROGRESS_RECOGNITION_START + fraction * span)


@dataclass(frozen=True)
class IntakeFile:
    """A file as dropped or selected by the user."""

    name: str
    media_type: str
    payload: bytes

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True)
class PermitData:
    """Permit fields as confirmed by the user, automatic or corrected."""

    code: str
    name: str
    issue_date: date | None = None
    expiry_date: date | None = None

    @classmethod
    def from_detected(cls, detected: DetectedPermit) -> "PermitData":
        return cls(
            code=detected.code,
            name=detected.name,
            issue_date=detected.issue_date,
            expiry_date=detected.expiry_date,
        )


@dataclass(frozen=True)
class UploadedItem:
    """One file in flight through the intake pipeline.

    Items are never mutated; the session swaps in a new snapshot on every
    change.
    """

    id: str
    file: IntakeFile
    status: UploadStatus = UploadStatus.UPLOADING
    progress: int = 0
    locator: str | None = None
    url: str | None = None
    detected: DetectedPermit | None = None
    error: str | None = None
    confirmed: PermitData | None = None
    permit_status_id: str | None = None
    document_id: str | None = None
