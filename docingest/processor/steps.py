from datetime import datetime, timezone

from docingest.config.settings import Settings
from docingest.extraction.models import ExtractionMethod
from docingest.extraction.registry import ExtractorRegistry
from docingest.logging.logger import Log
from docingest.processor.exceptions import FileProcessingError, LegacyFormatError
from docingest.processor.models import ProcessedFile, ProcessingMetadata
from docingest.processor.pipeline import PipelineContext, PipelineStep, ProcessingStage
from docingest.processor.text_stats import count_characters, count_words
from docingest.processor.validator import validate
from docingest.storage.base import BaseBlobStore
from docingest.storage.paths import check_user_id, document_path
from docingest.thumbnail.generator import ThumbnailGenerator

LEGACY_FORMAT_MESSAGE = "Legacy DOC format not supported. Please convert to DOCX format."


class ValidateStep(PipelineStep):
    stage = ProcessingStage.VALIDATING

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        validate(context.upload, self._settings)
        check_user_id(context.user_id)
        return context


class ExtractTextStep(PipelineStep):
    stage = ProcessingStage.EXTRACTING

    def __init__(self, registry: ExtractorRegistry, settings: Settings) -> None:
        self._registry = registry
        self._legacy_mime_types = frozenset(settings.legacy_mime_types)

    def run(self, context: PipelineContext) -> PipelineContext:
        mime_type = context.upload.mime_type
        if mime_type in self._legacy_mime_types:
            raise LegacyFormatError(LEGACY_FORMAT_MESSAGE, mime_type)

        extractor = self._registry.resolve(mime_type)
        try:
            context.extraction = extractor.extract(context.upload.buffer, context.deadline)
        except FileProcessingError as exc:
            # report the upload's own type, not the extractor's family (image/*)
            exc.mime_type = mime_type
            raise
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from file {context.file_id} "
            f"using {context.extraction.method.value}"
        )
        return context


class UploadOriginalStep(PipelineStep):
    stage = ProcessingStage.UPLOADING

    def __init__(self, blob_store: BaseBlobStore, settings: Settings) -> None:
        self._blob_store = blob_store
        self._prefix = settings.storage_prefix

    def run(self, context: PipelineContext) -> PipelineContext:
        upload = context.upload
        context.storage_path = document_path(
            self._prefix, context.user_id, context.file_id, upload.original_name
        )
        context.download_url = self._blob_store.upload(
            context.storage_path, upload.buffer, upload.mime_type
        )
        return context


class GenerateThumbnailStep(PipelineStep):
    stage = ProcessingStage.THUMBNAIL_GENERATING
    interruptible = False

    def __init__(self, thumbnail_generator: ThumbnailGenerator) -> None:
        self._thumbnail_generator = thumbnail_generator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload.is_image:
            context.thumbnail_url = self._thumbnail_generator.generate(
                context.upload.buffer, context.user_id, context.file_id
            )
        return context


class ComputeMetadataStep(PipelineStep):
    stage = ProcessingStage.METADATA_COMPUTING
    interruptible = False

    def __init__(self, settings: Settings) -> None:
        self._ocr_language = settings.ocr_language

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before metadata")
        extraction = context.extraction
        upload = context.upload
        metadata = ProcessingMetadata(
            processed_at=datetime.now(timezone.utc),
            processing_time=context.elapsed_ms(),
            method=extraction.method,
            word_count=count_words(extraction.text),
            character_count=count_characters(extraction.text),
            ocr_language=(
                self._ocr_language if extraction.method is ExtractionMethod.OCR else None
            ),
        )
        context.result = ProcessedFile(
            id=context.file_id,
            original_name=upload.original_name,
            mime_type=upload.mime_type,
            size=upload.size,
            text=extraction.text,
            confidence=extraction.confidence,
            pages=extraction.pages,
            download_url=context.download_url,
            thumbnail_url=context.thumbnail_url,
            metadata=metadata,
        )
        return context
