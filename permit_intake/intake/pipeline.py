from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from permit_intake.classification.models import DetectedPermit
from permit_intake.intake.models import IntakeFile, UploadedItem

ItemUpdater = Callable[..., UploadedItem | None]


@dataclass(slots=True)
class IntakeContext:
    item_id: str
    business_id: str
    file: IntakeFile
    update: ItemUpdater
    locator: str | None = None
    url: str | None = None
    text: str = ""
    detected: DetectedPermit | None = None


class IntakeStep(ABC):
    """One stage of an item's pipeline.

    ``failure_cause`` is the cause recorded on the item when the step raises.
    """

    name: str = ""
    failure_cause: str = ""

    @abstractmethod
    async def run(self, context: IntakeContext) -> IntakeContext:
        raise NotImplementedError
