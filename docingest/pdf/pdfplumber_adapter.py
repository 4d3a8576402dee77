import io

import pdfplumber

from docingest.config.settings import PDF_MIME_TYPE
from docingest.pdf.base import BasePdfExtractor
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def _read_pages(self, pdf_bytes: bytes, deadline: Deadline) -> tuple[list[str], int]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_count = len(pdf.pages)
                pages: list[str] = []
                for page in pdf.pages[: self.max_pages]:
                    deadline.check("PDF extraction")
                    pages.append(page.extract_text() or "")
            return pages, page_count
        except FileProcessingError:
            raise
        except Exception as exc:
            raise FileProcessingError(
                f"pdfplumber extraction failed: {exc}", PDF_MIME_TYPE
            ) from exc
