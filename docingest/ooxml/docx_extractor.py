import io

from docx import Document
from docx.document import Document as DocxDocument
from docx.oxml.ns import qn
from docx.oxml.xmlchemy import BaseOxmlElement
from docx.table import Table
from docx.text.paragraph import Paragraph

from docingest.config.settings import DOCX_MIME_TYPE
from docingest.extraction.base import BaseExtractor
from docingest.extraction.models import ExtractionMethod, ExtractionResult
from docingest.logging.logger import Log
from docingest.processor.deadline import Deadline
from docingest.processor.exceptions import FileProcessingError

_PARAGRAPH = qn("w:p")
_TABLE = qn("w:tbl")
_CONTENT_CONTROL = qn("w:sdt")
_CONTENT_CONTROL_BODY = qn("w:sdtContent")
# section and content-control properties, bookmarks and proofing marks carry no text
_NON_TEXT_TAGS = frozenset(
    qn(tag)
    for tag in (
        "w:sectPr",
        "w:sdtPr",
        "w:sdtEndPr",
        "w:bookmarkStart",
        "w:bookmarkEnd",
        "w:proofErr",
    )
)


class DocxExtractor(BaseExtractor):
    """Extracts raw text from OOXML word-processing documents using python-docx.

    Paragraphs and table rows are read in body order, including those wrapped
    in block-level content controls. Elements that carry no extractable text
    are reported as warnings, never as failures.
    """

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == DOCX_MIME_TYPE

    def extract(self, data: bytes, deadline: Deadline | None = None) -> ExtractionResult:
        try:
            document = Document(io.BytesIO(data))
            blocks, messages = self._read_body(document)
        except Exception as exc:
            raise FileProcessingError(
                f"python-docx extraction failed: {exc}", DOCX_MIME_TYPE
            ) from exc

        if messages:
            Log.warning(f"DOCX processing warnings: {'; '.join(messages)}")

        text = self._require_text(
            "\n\n".join(blocks), "No text found in DOCX file", DOCX_MIME_TYPE
        )
        return ExtractionResult(text=text, method=ExtractionMethod.DOCX)

    def _read_body(self, document: DocxDocument) -> tuple[list[str], list[str]]:
        blocks: list[str] = []
        messages: list[str] = []
        self._read_container(document.element.body, document, blocks, messages)
        return blocks, messages

    def _read_container(
        self,
        container: BaseOxmlElement,
        document: DocxDocument,
        blocks: list[str],
        messages: list[str],
    ) -> None:
        """Collect block text from body-level children, descending into content controls."""
        for child in container.iterchildren():
            if child.tag == _PARAGRAPH:
                text = Paragraph(child, document).text.strip()
                if text:
                    blocks.append(text)
            elif child.tag == _TABLE:
                blocks.extend(self._table_rows(Table(child, document)))
            elif child.tag == _CONTENT_CONTROL:
                content = child.find(_CONTENT_CONTROL_BODY)
                if content is None:
                    messages.append(f"Content control without content was ignored: {child.tag}")
                else:
                    self._read_container(content, document, blocks, messages)
            elif child.tag not in _NON_TEXT_TAGS:
                messages.append(f"Unrecognised element was ignored: {child.tag}")

    @staticmethod
    def _table_rows(table: Table) -> list[str]:
        rows: list[str] = []
        for row in table.rows:
            seen: set[int] = set()
            cells: list[str] = []
            for cell in row.cells:
                # merged cells are repeated once per grid column
                if id(cell._tc) in seen:
                    continue
                seen.add(id(cell._tc))
                cell_text = cell.text.strip()
                if cell_text:
                    cells.append(cell_text)
            if cells:
                rows.append("\t".join(cells))
        return rows
