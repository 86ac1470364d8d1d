from permit_intake.classification.models import PermitTypeMatch
from permit_intake.classification.permit_types import PERMIT_TYPES, PermitTypeRule
from permit_intake.classification.text_normalizer import normalize


def keyword_confidence(matched: int, total: int) -> float:
    """Confidence for ``matched`` of ``total`` keywords: 0.5 floor, capped at 1.0."""
    if total <= 0:
        return 0.0
    return min(1.0, matched / total + 0.5)


def detect_permit_type(
    text: str,
    rules: tuple[PermitTypeRule, ...] = PERMIT_TYPES,
) -> PermitTypeMatch | None:
    """Return the first permit type in ``rules`` with a keyword present in text.

    Entries are tried in order and the first one with at least one hit wins,
    even if a later entry would match more keywords. Returns None when no
    entry matches.
    """
    normalized = normalize(text)
    for rule in rules:
        matched = sum(1 for kw in rule.keywords if normalize(kw) in normalized)
        if matched > 0:
            return PermitTypeMatch(
                code=rule.code,
                name=rule.name,
                confidence=keyword_confidence(matched, len(rule.keywords)),
            )
    return None
