from dataclasses import dataclass
from enum import Enum


class ExtractionMethod(str, Enum):
    PDF = "pdf-extract"
    DOCX = "docx-extract"
    OCR = "ocr"


@dataclass(frozen=True)
class ExtractionResult:
    """Text produced by one extractor, plus the quality signals it knows about."""

    text: str
    method: ExtractionMethod
    confidence: float | None = None
    pages: int | None = None
