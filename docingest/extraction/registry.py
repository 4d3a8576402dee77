from collections.abc import Iterable

from docingest.config.settings import Settings
from docingest.extraction.base import BaseExtractor
from docingest.ocr.preprocessor import ImagePreprocessor
from docingest.ocr.tesseract_adapter import TesseractOcrExtractor
from docingest.ooxml.docx_extractor import DocxExtractor
from docingest.pdf.base import BasePdfExtractor
from docingest.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docingest.pdf.pymupdf_adapter import PyMuPdfAdapter
from docingest.processor.exceptions import FileProcessingError

PDF_ENGINES: dict[str, type[BasePdfExtractor]] = {
    "pdfplumber": PdfPlumberAdapter,
    "pymupdf": PyMuPdfAdapter,
}


class ExtractorRegistry:
    """Ordered set of extractors; the first one that accepts a mime type wins."""

    def __init__(self, extractors: Iterable[BaseExtractor]) -> None:
        self._extractors = list(extractors)

    @property
    def extractors(self) -> list[BaseExtractor]:
        return list(self._extractors)

    def resolve(self, mime_type: str) -> BaseExtractor:
        for extractor in self._extractors:
            if extractor.can_handle(mime_type):
                return extractor
        raise FileProcessingError(
            f"No extractor registered for mime type '{mime_type}'", mime_type
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtractorRegistry":
        """Build the default PDF -> DOCX -> OCR registry."""
        return cls(
            [
                pdf_extractor(settings),
                DocxExtractor(),
                TesseractOcrExtractor(
                    preprocessor=ImagePreprocessor(target_height=settings.ocr_target_height),
                    language=settings.ocr_language,
                    psm_mode=settings.ocr_psm_mode,
                    confidence_threshold=settings.ocr_confidence_threshold,
                ),
            ]
        )


def pdf_extractor(settings: Settings) -> BasePdfExtractor:
    """Instantiate the PDF engine named by ``settings.pdf_engine``."""
    engine = settings.pdf_engine.lower()
    if engine not in PDF_ENGINES:
        raise ValueError(f"Unknown PDF engine '{engine}'. Choose from: {list(PDF_ENGINES)}")
    return PDF_ENGINES[engine](max_pages=settings.pdf_max_pages)
