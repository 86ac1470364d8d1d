import asyncio

from permit_intake.classification.classifier import PermitClassifier
from permit_intake.intake.models import (
    ERROR_PROCESSING_FAILED,
    ERROR_UPLOAD_FAILED,
    PROGRESS_RECOGNITION_START,
    PROGRESS_UPLOAD_STARTED,
    PROGRESS_UPLOADED,
    UploadStatus,
    recognition_progress,
)
from permit_intake.intake.pipeline import IntakeContext, IntakeStep
from permit_intake.intake.progress import ProgressStream
from permit_intake.logging.logger import Log
from permit_intake.recognition.base import BaseRecognitionEngine
from permit_intake.storage.base import BaseObjectStore
from permit_intake.storage.paths import build_object_path


class UploadStep(IntakeStep):
    name = "upload"
    failure_cause = ERROR_UPLOAD_FAILED

    def __init__(self, object_store: BaseObjectStore) -> None:
        self._object_store = object_store

    async def run(self, context: IntakeContext) -> IntakeContext:
        context.update(progress=PROGRESS_UPLOAD_STARTED)
        path = build_object_path(context.business_id, context.file.name)
        context.locator = await asyncio.to_thread(
            self._object_store.put,
            path,
            context.file.payload,
            context.file.media_type,
        )
        context.url = self._object_store.public_url(context.locator)
        context.update(locator=context.locator, url=context.url, progress=PROGRESS_UPLOADED)
        Log.info(f"Stored {context.file.name}", item=context.item_id, locator=context.locator)
        return context


class RecognizeStep(IntakeStep):
    name = "recognition"
    failure_cause = ERROR_PROCESSING_FAILED

    def __init__(self, recognizer: BaseRecognitionEngine, language: str) -> None:
        self._recognizer = recognizer
        self._language = language

    async def run(self, context: IntakeContext) -> IntakeContext:
        context.update(status=UploadStatus.PROCESSING, progress=PROGRESS_RECOGNITION_START)
        stream = ProgressStream(asyncio.get_running_loop())
        follower = asyncio.create_task(self._follow(context, stream))
        try:
            context.text = await asyncio.to_thread(
                self._recognizer.recognize,
                context.file.payload,
                context.file.media_type,
                self._language,
                stream.publish,
            )
        finally:
            stream.close()
            await follower
        Log.info(
            f"Recognized {len(context.text)} chars from {context.file.name}",
            item=context.item_id,
        )
        return context

    @staticmethod
    async def _follow(context: IntakeContext, stream: ProgressStream) -> None:
        async for fraction in stream:
            progress = recognition_progress(fraction)
            if context.update(progress=progress) is not None:
                Log.debug("Recognition progress", item=context.item_id, progress=progress)


class ClassifyStep(IntakeStep):
    name = "classification"
    failure_cause = ERROR_PROCESSING_FAILED

    def __init__(self, classifier: PermitClassifier) -> None:
        self._classifier = classifier

    async def run(self, context: IntakeContext) -> IntakeContext:
        context.detected = self._classifier.classify(context.text)
        return context
