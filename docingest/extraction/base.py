from abc import ABC, abstractmethod

from docingest.extraction.models import ExtractionResult
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError


class BaseExtractor(ABC):
    """Contract for all text extraction strategies."""

    @abstractmethod
    def can_handle(self, mime_type: str) -> bool:
        """Return True if this extractor accepts the given mime type."""

    @abstractmethod
    def extract(self, data: bytes, deadline: Deadline | None = None) -> ExtractionResult:
        """Extract plain text from raw file bytes.

        Args:
            data: Raw file content.
            deadline: Optional budget; checked at natural break points.

        Returns:
            ExtractionResult with non-empty text.

        Raises:
            FileProcessingError: if no text could be extracted for any reason.
        """

    @staticmethod
    def _require_text(text: str, message: str, mime_type: str) -> str:
        stripped = text.strip()
        if not stripped:
            raise FileProcessingError(message, mime_type)
        return stripped
