from permit_intake.classification.classifier import PermitClassifier
from permit_intake.classification.date_classifier import classify_dates
from permit_intake.classification.date_extractor import extract_dates
from permit_intake.classification.detector import detect_permit_type
from permit_intake.classification.models import ClassifiedDates, DetectedPermit, PermitTypeMatch
from permit_intake.classification.permit_types import PERMIT_TYPES, PermitTypeRule, find_permit_type
from permit_intake.classification.text_normalizer import normalize

__all__ = [
    "PERMIT_TYPES",
    "ClassifiedDates",
    "DetectedPermit",
    "PermitClassifier",
    "PermitTypeMatch",
    "PermitTypeRule",
    "classify_dates",
    "detect_permit_type",
    "extract_dates",
    "find_permit_type",
    "normalize",
]
