import pymupdf

from docingest.config.settings import PDF_MIME_TYPE
from docingest.pdf.base import BasePdfExtractor
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def _read_pages(self, pdf_bytes: bytes, deadline: Deadline) -> tuple[list[str], int]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page_count = doc.page_count
                pages: list[str] = []
                for index in range(min(page_count, self.max_pages)):
                    deadline.check("PDF extraction")
                    pages.append(doc.load_page(index).get_text())
            return pages, page_count
        except FileProcessingError:
            raise
        except Exception as exc:
            raise FileProcessingError(
                f"pymupdf extraction failed: {exc}", PDF_MIME_TYPE
            ) from exc
