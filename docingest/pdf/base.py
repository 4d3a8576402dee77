from abc import abstractmethod

from docingest.config.settings import PDF_MIME_TYPE
from docingest.extraction.base import BaseExtractor
from docingest.extraction.models import ExtractionMethod, ExtractionResult
from docingest.processor.deadline import Deadline

NO_TEXT_MESSAGE = "No text found in PDF. The PDF might be image-based or corrupted."


class BasePdfExtractor(BaseExtractor):
    """Contract for all PDF text extraction adapters.

    Only the first ``max_pages`` pages are ever read.
    """

    def __init__(self, max_pages: int = 20) -> None:
        self._max_pages = max_pages

    @property
    def max_pages(self) -> int:
        return self._max_pages

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == PDF_MIME_TYPE

    def extract(self, data: bytes, deadline: Deadline | None = None) -> ExtractionResult:
        page_texts, page_count = self._read_pages(data, deadline or Deadline.none())
        text = self._require_text("\n".join(page_texts), NO_TEXT_MESSAGE, PDF_MIME_TYPE)
        return ExtractionResult(
            text=text,
            method=ExtractionMethod.PDF,
            pages=page_count,
        )

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes, deadline: Deadline) -> tuple[list[str], int]:
        """Read text from up to ``max_pages`` pages.

        Returns:
            Tuple of (per-page texts, total page count of the document).

        Raises:
            FileProcessingError: if the engine cannot parse the document.
        """
