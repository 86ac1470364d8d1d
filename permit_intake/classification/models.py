from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PermitTypeMatch:
    """Detector output: which permit type the text looks like."""

    code: str
    name: str
    confidence: float


@dataclass(frozen=True)
class ClassifiedDates:
    """Issue/expiry roles assigned to extracted dates."""

    issue_date: date | None = None
    expiry_date: date | None = None


@dataclass(frozen=True)
class DetectedPermit:
    """Tentative permit proposal built from recognized text."""

    code: str
    name: str
    confidence: float
    issue_date: date | None = None
    expiry_date: date | None = None
