"""Turns recognized document text into a permit proposal."""

from permit_intake.classification.date_classifier import DEFAULT_CONTEXT_WINDOW, classify_dates
from permit_intake.classification.date_extractor import (
    DEFAULT_MAX_YEAR,
    DEFAULT_MIN_YEAR,
    extract_dates,
)
from permit_intake.classification.detector import detect_permit_type
from permit_intake.classification.models import DetectedPermit
from permit_intake.classification.permit_types import PERMIT_TYPES, PermitTypeRule
from permit_intake.config.settings import Settings
from permit_intake.logging.logger import Log


class PermitClassifier:
    """Runs detector, date extractor and date classifier over one text."""

    def __init__(
        self,
        *,
        rules: tuple[PermitTypeRule, ...] = PERMIT_TYPES,
        min_year: int = DEFAULT_MIN_YEAR,
        max_year: int = DEFAULT_MAX_YEAR,
        context_window: int = DEFAULT_CONTEXT_WINDOW,
    ) -> None:
        self._rules = rules
        self._min_year = min_year
        self._max_year = max_year
        self._context_window = context_window

    @classmethod
    def from_settings(cls, settings: Settings) -> "PermitClassifier":
        return cls(
            min_year=settings.date_min_year,
            max_year=settings.date_max_year,
            context_window=settings.date_context_window,
        )

    def classify(self, text: str) -> DetectedPermit | None:
        """Return the combined proposal, or None when no permit type matched."""
        match = detect_permit_type(text, self._rules)
        dates = extract_dates(text, self._min_year, self._max_year)
        roles = classify_dates(text, dates, self._context_window)

        if match is None:
            Log.info("No permit type keywords found", dates_found=len(dates))
            return None

        Log.info(
            f"Detected {match.code}",
            confidence=f"{match.confidence:.2f}",
            issue_date=roles.issue_date,
            expiry_date=roles.expiry_date,
        )
        return DetectedPermit(
            code=match.code,
            name=match.name,
            confidence=match.confidence,
            issue_date=roles.issue_date,
            expiry_date=roles.expiry_date,
        )
