import io
import re
from collections.abc import Mapping

from docx import Document
from docx.document import Document as DocxDocument

CORE_PROPERTY_KEYS = ("title", "author", "subject", "keywords")

# page/column breaks from PDF text become line breaks; other C0 controls are not valid XML
_BREAK_CHARS = re.compile(r"[\x0b\x0c]")
_XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0e-\x1f\ufffe\uffff]")


class DocxBuilder:
    """Builds a minimal DOCX from plain text: one paragraph per blank-line block."""

    def build(self, text: str, metadata: Mapping[str, object] | None = None) -> bytes:
        document = Document()
        for block in self.split_paragraphs(text):
            document.add_paragraph(xml_safe(block))
        if metadata:
            self._apply_core_properties(document, metadata)
        buf = io.BytesIO()
        document.save(buf)
        return buf.getvalue()

    @staticmethod
    def split_paragraphs(text: str) -> list[str]:
        return text.split("\n\n")

    @staticmethod
    def _apply_core_properties(
        document: DocxDocument, metadata: Mapping[str, object]
    ) -> None:
        properties = document.core_properties
        for key in CORE_PROPERTY_KEYS:
            value = metadata.get(key)
            if value is not None:
                setattr(properties, key, xml_safe(str(value)))


def xml_safe(text: str) -> str:
    """Drop characters python-docx refuses to serialise."""
    return _XML_ILLEGAL_CHARS.sub("", _BREAK_CHARS.sub("\n", text))
