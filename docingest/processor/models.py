from dataclasses import dataclass
from datetime import datetime

from docingest.extraction.models import ExtractionMethod


@dataclass(frozen=True)
class FileUpload:
    """Raw upload handed over by the multipart-parsing layer."""

    buffer: bytes
    original_name: str
    mime_type: str
    size: int

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class ProcessingMetadata:
    """Timing and text statistics for one processed file."""

    processed_at: datetime
    processing_time: int
    method: ExtractionMethod
    word_count: int
    character_count: int
    ocr_language: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "processedAt": self.processed_at.isoformat(),
            "processingTime": self.processing_time,
            "method": self.method.value,
            "wordCount": self.word_count,
            "characterCount": self.character_count,
        }
        if self.ocr_language is not None:
            payload["ocrLanguage"] = self.ocr_language
        return payload


@dataclass(frozen=True)
class ProcessedFile:
    """Result of a successful pipeline run."""

    id: str
    original_name: str
    mime_type: str
    size: int
    text: str
    download_url: str
    metadata: ProcessingMetadata
    thumbnail_url: str = ""
    confidence: float | None = None
    pages: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Render the outbound camelCase shape consumed by the service layer."""
        payload: dict[str, object] = {
            "id": self.id,
            "originalName": self.original_name,
            "mimeType": self.mime_type,
            "size": self.size,
            "text": self.text,
            "downloadUrl": self.download_url,
            "thumbnailUrl": self.thumbnail_url,
            "metadata": self.metadata.to_dict(),
        }
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        if self.pages is not None:
            payload["pages"] = self.pages
        return payload
