from datetime import date

from permit_intake.classification.models import ClassifiedDates
from permit_intake.classification.text_normalizer import normalize

ISSUE_KEYWORDS: tuple[str, ...] = ("emision", "emitida", "fecha", "otorgada", "concedida")
EXPIRY_KEYWORDS: tuple[str, ...] = (
    "vencimiento",
    "validez",
    "vence",
    "hasta",
    "expira",
    "caduca",
)

DEFAULT_CONTEXT_WINDOW = 100


def format_locale_date(value: date) -> str:
    """Render a date the way Chilean documents print it: ``dd-mm-yyyy``."""
    return value.strftime("%d-%m-%Y")


def classify_dates(
    text: str,
    dates: list[date],
    window: int = DEFAULT_CONTEXT_WINDOW,
) -> ClassifiedDates:
    """Decide which of the extracted dates is the issue date and which the expiry.

    A single date is taken as the issue date. With several, each date is
    looked up in the text by its ``dd-mm-yyyy`` rendering and the ``window``
    characters on either side are checked for issuance and expiry keywords;
    the first date seen in each kind of context takes that role. Dates not
    found verbatim are skipped here. When no role was assigned by context,
    the earliest date becomes the issue date and the latest, if it differs,
    the expiry date.
    """
    if not dates:
        return ClassifiedDates()
    if len(dates) == 1:
        return ClassifiedDates(issue_date=dates[0])

    issue_date: date | None = None
    expiry_date: date | None = None

    for candidate in dates:
        context = _context_around(text, format_locale_date(candidate), window)
        if context is None:
            continue
        if issue_date is None and _has_keyword(context, ISSUE_KEYWORDS):
            issue_date = candidate
        if expiry_date is None and _has_keyword(context, EXPIRY_KEYWORDS):
            expiry_date = candidate

    if issue_date is None and expiry_date is None:
        ordered = sorted(dates)
        issue_date = ordered[0]
        if ordered[-1] != ordered[0]:
            expiry_date = ordered[-1]

    return ClassifiedDates(issue_date=issue_date, expiry_date=expiry_date)


def _context_around(text: str, literal: str, window: int) -> tuple[str, str] | None:
    index = text.find(literal)
    if index == -1:
        return None
    before = normalize(text[max(0, index - window):index])
    after = normalize(text[index:index + window])
    return before, after


def _has_keyword(context: tuple[str, str], keywords: tuple[str, ...]) -> bool:
    before, after = context
    return any(kw in before or kw in after for kw in keywords)
