import uuid
from collections.abc import Mapping

from docingest.config.settings import DOCX_MIME_TYPE, Settings
from docingest.conversion.models import ConversionResult
from docingest.logging.logger import Log
from docingest.ooxml.builder import DocxBuilder
from docingest.processor.exceptions import (
    ConversionNotAvailableError,
    FileProcessingError,
    UnsupportedConversionError,
)
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError
from docingest.storage.factory import BlobStoreFactory
from docingest.storage.paths import converted_path


class ConversionEngine:
    """Turns previously extracted text into a new binary document.

    Supported pairs: pdf -> docx. The docx -> pdf direction is recognised
    but not implemented and always fails with ConversionNotAvailableError.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        *,
        prefix: str,
        docx_builder: DocxBuilder | None = None,
    ) -> None:
        self._blob_store = blob_store
        self._prefix = prefix
        self._docx_builder = docx_builder or DocxBuilder()

    def convert(
        self,
        text: str,
        from_format: str,
        to_format: str,
        user_id: str,
        metadata: Mapping[str, object] | None = None,
    ) -> ConversionResult:
        source = from_format.strip().lower()
        target = to_format.strip().lower()
        try:
            if (source, target) == ("docx", "pdf"):
                raise ConversionNotAvailableError(
                    "PDF conversion feature is not yet available. "
                    "Use a dedicated PDF generation service."
                )
            if (source, target) == ("pdf", "docx"):
                return self._to_docx(text, user_id, metadata)
            raise UnsupportedConversionError(
                f"Conversion from {from_format} to {to_format} not supported"
            )
        except (FileProcessingError, StorageError) as exc:
            Log.error(
                f"File conversion failed ({from_format} -> {to_format}) "
                f"for user {user_id}: {exc}"
            )
            raise

    def _to_docx(
        self,
        text: str,
        user_id: str,
        metadata: Mapping[str, object] | None,
    ) -> ConversionResult:
        file_id = str(uuid.uuid4())
        try:
            buffer = self._docx_builder.build(text, metadata)
        except Exception as exc:
            raise FileProcessingError(
                f"Failed to convert to DOCX format: {exc}", DOCX_MIME_TYPE
            ) from exc

        path = converted_path(self._prefix, user_id, file_id)
        download_url = self._blob_store.upload(path, buffer, DOCX_MIME_TYPE)
        Log.info(f"Converted text to DOCX for user {user_id}: {len(buffer)} bytes at {path}")
        return ConversionResult(
            buffer=buffer,
            mime_type=DOCX_MIME_TYPE,
            download_url=download_url,
        )


def build_conversion_engine(
    settings: Settings,
    blob_store: BaseBlobStore | None = None,
) -> ConversionEngine:
    """Build a ConversionEngine backed by the configured blob store."""
    store = blob_store if blob_store is not None else BlobStoreFactory.create(settings)
    return ConversionEngine(store, prefix=settings.storage_prefix)
