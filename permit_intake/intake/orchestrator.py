"""Per-session coordinator of the upload -> recognition -> classification flow.

Item lifecycle::

    uploading -> processing -> detected | error -> confirmed

Upload and recognition failures park the item in ``error`` with a cause; a
document with no recognisable permit type lands in ``error`` as well, but as
an expected outcome that the user resolves through the correction form.
"""

import asyncio
from dataclasses import replace
from datetime import date
from uuid import uuid4

from permit_intake.classification.classifier import PermitClassifier
from permit_intake.classification.models import DetectedPermit
from permit_intake.config.settings import Settings
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.database.repositories.documents_repository import DocumentsRepository
from permit_intake.database.repositories.permit_catalog_repository import (
    PermitCatalogRepository,
)
from permit_intake.intake.correction import CorrectionForm, DeleteRequest
from permit_intake.intake.exceptions import ConfirmationError, InvalidTransitionError
from permit_intake.intake.models import (
    ERROR_TYPE_NOT_DETECTED,
    PROGRESS_DONE,
    IntakeFile,
    PermitData,
    UploadedItem,
    UploadStatus,
)
from permit_intake.intake.pipeline import IntakeContext, IntakeStep
from permit_intake.intake.recorder import ConfirmationRequest, PermitRecorder
from permit_intake.intake.session import IntakeSession
from permit_intake.intake.steps import ClassifyStep, RecognizeStep, UploadStep
from permit_intake.intake.validation import DEFAULT_MAX_UPLOAD_BYTES, validate_upload
from permit_intake.logging.logger import Log
from permit_intake.recognition.factory import RecognitionEngineFactory
from permit_intake.storage.factory import ObjectStoreFactory

CORRECTABLE = (UploadStatus.DETECTED, UploadStatus.ERROR)


class IntakeOrchestrator:
    """Owns the session's items from drop to confirmation."""

    def __init__(
        self,
        *,
        business_id: str,
        user_id: str,
        steps: list[IntakeStep],
        recorder: PermitRecorder,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        session: IntakeSession | None = None,
    ) -> None:
        self._business_id = business_id
        self._user_id = user_id
        self._steps = steps
        self._recorder = recorder
        self._max_upload_bytes = max_upload_bytes
        self._session = session or IntakeSession()
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._confirming: set[str] = set()

    @property
    def session(self) -> IntakeSession:
        return self._session

    def add_file(self, file: IntakeFile) -> UploadedItem:
        """Validate a dropped file, add it to the session and start its pipeline.

        Must be called from a running event loop.

        Raises:
            UnsupportedMediaTypeError, FileTooLargeError: the file is rejected
                and no item is created.
        """
        validate_upload(file, self._max_upload_bytes)
        item = UploadedItem(id=uuid4().hex, file=file)
        self._session.add(item)
        Log.info(f"Accepted {file.name}", item=item.id, size=file.size)
        task = asyncio.create_task(self.process(item.id))
        task.add_done_callback(lambda done: self._forget(item.id, done))
        self._tasks[item.id] = task
        return item

    async def wait_idle(self) -> None:
        """Wait for every pipeline started so far to settle."""
        while self._tasks:
            tasks = list(self._tasks.values())
            self._tasks.clear()
            await asyncio.gather(*tasks, return_exceptions=True)

    def _forget(self, item_id: str, task: asyncio.Task[None]) -> None:
        if self._tasks.get(item_id) is task:
            del self._tasks[item_id]
        if not task.cancelled() and task.exception() is not None:
            Log.error(f"Pipeline crashed: {task.exception()}", item=item_id)

    async def process(self, item_id: str) -> None:
        """Run the item's steps in order; never raises for item-level failures."""
        item = self._session.find(item_id)
        if item is None:
            Log.info("Item removed before processing", item=item_id)
            return
        context = IntakeContext(
            item_id=item_id,
            business_id=self._business_id,
            file=item.file,
            update=lambda **changes: self._session.update(item_id, **changes),
        )

        for step in self._steps:
            if self._session.find(item_id) is None:
                Log.info(f"Item removed, skipping {step.name}", item=item_id)
                return
            try:
                context = await step.run(context)
            except Exception as exc:
                Log.error(f"{step.name} failed: {exc}", item=item_id)
                self._session.update(
                    item_id,
                    status=UploadStatus.ERROR,
                    progress=PROGRESS_DONE,
                    error=step.failure_cause,
                )
                return

        self._settle(item_id, context.detected)

    def _settle(self, item_id: str, detected: DetectedPermit | None) -> None:
        if detected is None:
            settled = self._session.update(
                item_id,
                status=UploadStatus.ERROR,
                progress=PROGRESS_DONE,
                error=ERROR_TYPE_NOT_DETECTED,
            )
            outcome = "needs manual classification"
        else:
            settled = self._session.update(
                item_id,
                status=UploadStatus.DETECTED,
                progress=PROGRESS_DONE,
                detected=detected,
                error=None,
            )
            outcome = f"detected {detected.code}"

        if settled is None:
            Log.info("Discarding result for removed item", item=item_id)
        else:
            Log.info(f"Item {outcome}", item=item_id)

    def open_correction(self, item_id: str, today: date | None = None) -> CorrectionForm:
        item = self._session.get(item_id)
        if item.status not in CORRECTABLE:
            raise InvalidTransitionError(
                f"Item {item_id} cannot be corrected while {item.status.value}"
            )
        return CorrectionForm.for_item(item, today=today)

    async def resolve_correction(
        self, item_id: str, decision: PermitData | DeleteRequest
    ) -> UploadedItem | None:
        """Apply the correction form's outcome: confirm with its data, or delete."""
        if isinstance(decision, DeleteRequest):
            self.delete(decision.item_id)
            return None
        return await self.confirm(item_id, decision)

    async def confirm(self, item_id: str, permit: PermitData | None = None) -> UploadedItem:
        """Persist the item's permit and mark it confirmed.

        ``permit`` overrides the detection wholesale; without it the detected
        proposal is accepted as-is.

        Raises:
            InvalidTransitionError: the item is not awaiting confirmation, or
                has neither a detection nor a manual classification, or its
                file was never stored, or another confirmation of it is still
                in flight.
            ConfirmationError: persistence failed; the item is left unchanged
                and the call can be retried.
        """
        item = self._session.get(item_id)
        if item_id in self._confirming:
            raise InvalidTransitionError(f"Item {item_id} is already being confirmed")
        if item.status not in CORRECTABLE:
            raise InvalidTransitionError(
                f"Item {item_id} cannot be confirmed while {item.status.value}"
            )
        if permit is None:
            if item.detected is None:
                raise InvalidTransitionError(
                    f"Item {item_id} needs a manual permit type before confirming"
                )
            permit = PermitData.from_detected(item.detected)
        if item.url is None:
            raise InvalidTransitionError(
                f"{item.file.name} was never stored; add the file again"
            )

        request = ConfirmationRequest(
            business_id=self._business_id,
            user_id=self._user_id,
            permit=permit,
            file_name=item.file.name,
            media_type=item.file.media_type,
            size_bytes=item.file.size,
            url=item.url,
        )
        self._confirming.add(item_id)
        try:
            receipt = await asyncio.to_thread(self._recorder.record, request)
        except Exception as exc:
            Log.error(f"Could not confirm {permit.code}: {exc}", item=item_id)
            raise ConfirmationError(f"Could not confirm {permit.name}") from exc
        finally:
            self._confirming.discard(item_id)

        changes = {
            "status": UploadStatus.CONFIRMED,
            "confirmed": permit,
            "permit_status_id": receipt.permit_status.id,
            "document_id": receipt.document.id,
        }
        confirmed = self._session.update(item_id, **changes)
        Log.info(f"Confirmed {permit.code}", item=item_id)
        return confirmed or replace(item, **changes)  # type: ignore[arg-type]

    def delete(self, item_id: str) -> None:
        """Drop the item from the session.

        Any in-flight upload or recognition keeps running; its result is
        discarded. The stored binary, if any, is not reclaimed.
        """
        removed = self._session.remove(item_id)
        if removed is not None:
            Log.info(f"Removed {removed.file.name}", item=item_id, status=removed.status.value)


def build_orchestrator(settings: Settings, *, business_id: str, user_id: str) -> IntakeOrchestrator:
    """Build an orchestrator with all required adapters."""
    steps: list[IntakeStep] = [
        UploadStep(ObjectStoreFactory.create(settings)),
        RecognizeStep(RecognitionEngineFactory.create(settings), settings.recognition_language),
        ClassifyStep(PermitClassifier.from_settings(settings)),
    ]
    recorder = PermitRecorder(
        catalog_repo=PermitCatalogRepository(),
        permit_repo=BusinessPermitRepository(),
        documents_repo=DocumentsRepository(),
    )
    return IntakeOrchestrator(
        business_id=business_id,
        user_id=user_id,
        steps=steps,
        recorder=recorder,
        max_upload_bytes=settings.max_upload_bytes,
    )
