from docingest.config.settings import Settings
from docingest.extraction.registry import ExtractorRegistry
from docingest.logging.logger import Log
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError
from docingest.processor.models import FileUpload, ProcessedFile
from docingest.processor.pipeline import PipelineContext, PipelineStep, ProcessingStage
from docingest.processor.steps import (
    ComputeMetadataStep,
    ExtractTextStep,
    GenerateThumbnailStep,
    UploadOriginalStep,
    ValidateStep,
)
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError
from docingest.storage.factory import BlobStoreFactory
from docingest.thumbnail.generator import ThumbnailGenerator


class Processor:
    """Runs one upload through the ingestion pipeline.

    Pipeline: validate -> extract -> upload original -> thumbnail (images)
    -> metadata. Steps run strictly in order; the first failure aborts the
    call and nothing after it runs.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        blob_store: BaseBlobStore,
        timeout_seconds: float | None = None,
    ) -> None:
        self._steps = steps
        self._blob_store = blob_store
        self._timeout_seconds = timeout_seconds

    def process(
        self,
        upload: FileUpload,
        user_id: str,
        deadline: Deadline | None = None,
    ) -> ProcessedFile:
        """Validate, extract, store and describe a single upload.

        Raises:
            FileProcessingError: on validation or extraction failure.
            StorageError: if the original cannot be stored.
        """
        context = PipelineContext(
            upload=upload,
            user_id=user_id,
            deadline=deadline or Deadline(self._timeout_seconds),
        )
        Log.info(
            f"Processing file {context.file_id} ({upload.original_name}, "
            f"{upload.mime_type}, {upload.size} bytes) for user {user_id}"
        )
        try:
            for step in self._steps:
                context.stage = step.stage
                if step.interruptible:
                    context.deadline.check(f"Stage '{step.stage.value}'")
                context = step.run(context)
        except (FileProcessingError, StorageError) as exc:
            self._fail(context, exc)
            raise
        except Exception as exc:
            self._fail(context, exc, unexpected=True)
            raise FileProcessingError(
                f"Failed to process file: {exc}", upload.mime_type
            ) from exc

        if context.result is None:
            raise RuntimeError("Pipeline finished without producing a result")
        context.stage = ProcessingStage.DONE
        Log.info(
            f"File {context.file_id} processed in {context.result.metadata.processing_time}ms "
            f"via {context.result.metadata.method.value}: "
            f"{context.result.metadata.character_count} chars, "
            f"confidence={context.result.confidence}"
        )
        return context.result

    def delete_file(self, path: str) -> None:
        """Remove a stored artifact.

        Raises:
            StorageError: if the object cannot be deleted.
        """
        try:
            self._blob_store.delete(path)
        except StorageError as exc:
            Log.error(f"File deletion failed for {path}: {exc}")
            raise
        Log.info(f"File deleted from storage: {path}")

    @staticmethod
    def _fail(context: PipelineContext, exc: Exception, unexpected: bool = False) -> None:
        failed_stage = context.stage
        context.stage = ProcessingStage.FAILED
        context.error_message = str(exc)
        log = Log.exception if unexpected else Log.error
        log(
            f"File processing failed at {failed_stage.value} for file {context.file_id} "
            f"({context.upload.original_name}, {context.upload.mime_type}) "
            f"for user {context.user_id} after {context.elapsed_ms()}ms: {exc}"
        )


def build_processor(
    settings: Settings,
    blob_store: BaseBlobStore | None = None,
    registry: ExtractorRegistry | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    store = blob_store if blob_store is not None else BlobStoreFactory.create(settings)
    extractors = registry if registry is not None else ExtractorRegistry.from_settings(settings)
    thumbnail_generator = ThumbnailGenerator(
        store,
        prefix=settings.storage_prefix,
        width=settings.thumbnail_width,
        height=settings.thumbnail_height,
        quality=settings.thumbnail_quality,
    )
    steps: list[PipelineStep] = [
        ValidateStep(settings),
        ExtractTextStep(extractors, settings),
        UploadOriginalStep(store, settings),
        GenerateThumbnailStep(thumbnail_generator),
        ComputeMetadataStep(settings),
    ]
    return Processor(
        steps=steps,
        blob_store=store,
        timeout_seconds=settings.processing_timeout_seconds,
    )
