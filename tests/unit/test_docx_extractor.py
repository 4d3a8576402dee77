import io
from unittest.mock import patch

import pytest
from docx import Document
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls

from docingest.extraction.models import ExtractionMethod
from docingest.ooxml.docx_extractor import DocxExtractor
from docingest.processor.exceptions import FileProcessingError


def _docx_with_content_control() -> bytes:
    document = Document()
    document.add_paragraph("Visible paragraph")
    document.element.body.insert(0, OxmlElement("w:sdt"))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def _docx_with_filled_content_controls() -> bytes:
    """Body text lives only inside block-level content controls, one of them nested."""
    document = Document()
    body = document.element.body
    outer = parse_xml(
        f"<w:sdt {nsdecls('w')}>"
        "<w:sdtPr><w:alias w:val=\"Name\"/></w:sdtPr>"
        "<w:sdtContent>"
        "<w:p><w:r><w:t>Jane Doe Senior Engineer</w:t></w:r></w:p>"
        "<w:sdt><w:sdtContent>"
        "<w:tbl><w:tblGrid><w:gridCol/><w:gridCol/></w:tblGrid><w:tr>"
        "<w:tc><w:p><w:r><w:t>Skills</w:t></w:r></w:p></w:tc>"
        "<w:tc><w:p><w:r><w:t>Python</w:t></w:r></w:p></w:tc>"
        "</w:tr></w:tbl>"
        "</w:sdtContent></w:sdt>"
        "</w:sdtContent>"
        "</w:sdt>"
    )
    body.insert(0, outer)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


class TestDocxExtractor:
    def test_extract_returns_paragraph_text(self, sample_docx_bytes: bytes) -> None:
        result = DocxExtractor().extract(sample_docx_bytes)
        assert "Jane Doe" in result.text
        assert "Senior Python Engineer" in result.text
        assert result.method is ExtractionMethod.DOCX
        assert result.confidence is None
        assert result.pages is None

    def test_extract_includes_table_rows(self, sample_docx_bytes: bytes) -> None:
        result = DocxExtractor().extract(sample_docx_bytes)
        assert "Skills\tpytest" in result.text

    def test_keeps_body_order(self, sample_docx_bytes: bytes) -> None:
        text = DocxExtractor().extract(sample_docx_bytes).text
        assert text.index("Jane Doe") < text.index("Senior Python Engineer") < text.index("Skills")

    def test_empty_document_fails(self, empty_docx_bytes: bytes) -> None:
        with pytest.raises(FileProcessingError, match="No text found in DOCX file"):
            DocxExtractor().extract(empty_docx_bytes)

    def test_invalid_container_fails(self) -> None:
        with pytest.raises(FileProcessingError, match="python-docx extraction failed"):
            DocxExtractor().extract(b"PK not really a zip")

    def test_structural_messages_are_logged_not_fatal(self) -> None:
        with patch("docingest.ooxml.docx_extractor.Log") as mock_log:
            result = DocxExtractor().extract(_docx_with_content_control())
        assert result.text == "Visible paragraph"
        mock_log.warning.assert_called_once()
        assert "Content control without content" in mock_log.warning.call_args[0][0]

    def test_reads_text_inside_content_controls(self) -> None:
        with patch("docingest.ooxml.docx_extractor.Log") as mock_log:
            result = DocxExtractor().extract(_docx_with_filled_content_controls())
        assert result.text == "Jane Doe Senior Engineer\n\nSkills\tPython"
        mock_log.warning.assert_not_called()

    def test_handles_only_docx(self) -> None:
        extractor = DocxExtractor()
        assert extractor.can_handle(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )
        assert not extractor.can_handle("application/msword")
