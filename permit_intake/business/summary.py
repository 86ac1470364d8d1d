from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from permit_intake.database.models import ESTADO_APPROVED, ESTADO_PENDING, BusinessPermitStatusRecord


@dataclass(frozen=True)
class PermitSummary:
    approved: int
    pending: int
    expiring_soon: int


def is_expiring_soon(record: BusinessPermitStatusRecord, today: date, warning_days: int) -> bool:
    """True when the expiry date falls between today and ``warning_days`` ahead."""
    if record.expiry_date is None:
        return False
    return today <= record.expiry_date <= today + timedelta(days=warning_days)


def summarize(
    records: Iterable[BusinessPermitStatusRecord],
    today: date | None = None,
    warning_days: int = 30,
) -> PermitSummary:
    today = today or date.today()
    approved = pending = expiring = 0
    for record in records:
        if record.estado == ESTADO_APPROVED:
            approved += 1
        elif record.estado == ESTADO_PENDING:
            pending += 1
        if is_expiring_soon(record, today, warning_days):
            expiring += 1
    return PermitSummary(approved=approved, pending=pending, expiring_soon=expiring)
