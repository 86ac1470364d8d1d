from dataclasses import dataclass
from datetime import date

from permit_intake.classification.permit_types import PERMIT_TYPES, PermitTypeRule, find_permit_type
from permit_intake.intake.exceptions import CorrectionError
from permit_intake.intake.models import PermitData, UploadedItem


@dataclass(frozen=True)
class DeleteRequest:
    """Emitted by the correction form when the user discards the item."""

    item_id: str


class CorrectionForm:
    """Manual override of a permit proposal.

    Seeded with the item's detection (or empty). The issue date cannot be in
    the future and the expiry date cannot precede the issue date, or today
    when there is no issue date; an issue date later than the current expiry
    is rejected as well. Confirming requires a permit type.
    """

    def __init__(
        self,
        item_id: str,
        file_name: str,
        initial: PermitData | None = None,
        today: date | None = None,
    ) -> None:
        self.item_id = item_id
        self.file_name = file_name
        self._initial = initial
        self._today = today or date.today()
        self.reset()

    @classmethod
    def for_item(cls, item: UploadedItem, today: date | None = None) -> "CorrectionForm":
        initial = PermitData.from_detected(item.detected) if item.detected else None
        return cls(item.id, item.file.name, initial=initial, today=today)

    @property
    def options(self) -> tuple[PermitTypeRule, ...]:
        return PERMIT_TYPES

    @property
    def is_edit(self) -> bool:
        """True when correcting a detection rather than classifying from scratch."""
        return self._initial is not None

    @property
    def permit_code(self) -> str | None:
        return self._code

    @property
    def issue_date(self) -> date | None:
        return self._issue_date

    @property
    def expiry_date(self) -> date | None:
        return self._expiry_date

    @property
    def can_confirm(self) -> bool:
        return self._code is not None

    def reset(self) -> None:
        self._code = self._initial.code if self._initial else None
        self._issue_date = self._initial.issue_date if self._initial else None
        self._expiry_date = self._initial.expiry_date if self._initial else None

    def select_type(self, code: str) -> None:
        if find_permit_type(code) is None:
            raise CorrectionError(f"Unknown permit type {code}")
        self._code = code

    def set_issue_date(self, value: date | None) -> None:
        if value is not None and value > self._today:
            raise CorrectionError("Issue date cannot be in the future")
        if value is not None and self._expiry_date is not None and value > self._expiry_date:
            raise CorrectionError(
                f"Issue date cannot be after the expiry date {self._expiry_date.isoformat()}"
            )
        self._issue_date = value

    def set_expiry_date(self, value: date | None) -> None:
        if value is not None:
            earliest = self._issue_date or self._today
            if value < earliest:
                raise CorrectionError(f"Expiry date cannot be before {earliest.isoformat()}")
        self._expiry_date = value

    def confirm(self) -> PermitData:
        rule = find_permit_type(self._code) if self._code else None
        if rule is None:
            raise CorrectionError("Select a permit type before confirming")
        return PermitData(
            code=rule.code,
            name=rule.name,
            issue_date=self._issue_date,
            expiry_date=self._expiry_date,
        )

    def delete(self) -> DeleteRequest:
        return DeleteRequest(self.item_id)
