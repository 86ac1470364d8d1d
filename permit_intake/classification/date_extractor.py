import re
from datetime import date

MONTHS: dict[str, int] = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}

DAY_FIRST_PATTERN = re.compile(r"\b([0-9]{1,2})[/\-.]([0-9]{1,2})[/\-.]([0-9]{4})\b")
SPELLED_PATTERN = re.compile(r"\b([0-9]{1,2})\s+de\s+(\w+)\s+de\s+([0-9]{4})\b")
YEAR_FIRST_PATTERN = re.compile(r"\b([0-9]{4})[/\-.]([0-9]{1,2})[/\-.]([0-9]{1,2})\b")

DEFAULT_MIN_YEAR = 2020
DEFAULT_MAX_YEAR = 2030


def extract_dates(
    text: str,
    min_year: int = DEFAULT_MIN_YEAR,
    max_year: int = DEFAULT_MAX_YEAR,
) -> list[date]:
    """Find date literals in text and return them as calendar dates.

    Recognised shapes, scanned in this order over the lower-cased text:
    ``D/M/YYYY`` (also ``-`` or ``.`` separated), ``D de <mes> de YYYY`` and
    ``YYYY/M/D``. Literals that do not form a real calendar date are dropped,
    as are dates whose year falls outside ``[min_year, max_year]``. Duplicates
    are kept.
    """
    lowered = text.lower()
    found: list[date] = []

    for pattern in (DAY_FIRST_PATTERN, SPELLED_PATTERN, YEAR_FIRST_PATTERN):
        for match in pattern.finditer(lowered):
            parsed = _parse_match(match.groups())
            if parsed is not None:
                found.append(parsed)

    return [d for d in found if min_year <= d.year <= max_year]


def _parse_match(groups: tuple[str, ...]) -> date | None:
    first, middle, last = groups
    month = MONTHS.get(middle)
    if month is not None:
        return _safe_date(int(last), month, int(first))
    if not middle.isdigit():
        return None

    parts = [int(first), int(middle), int(last)]
    if parts[2] > 1900:
        return _safe_date(parts[2], parts[1], parts[0])
    if parts[0] > 1900:
        return _safe_date(parts[0], parts[1], parts[2])
    return None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None
