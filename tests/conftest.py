import io

import pytest
from docx import Document
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docingest.config.settings import DOCX_MIME_TYPE, PDF_MIME_TYPE, Settings
from docingest.processor.models import FileUpload
from docingest.storage.memory_adapter import InMemoryBlobStore


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, storage_backend="memory", storage_prefix="cv-documents")


@pytest.fixture()
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore(bucket="test-bucket")


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text layer (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with two paragraphs and a small table."""
    document = Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Senior Python Engineer")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Skills"
    table.rows[0].cells[1].text = "pytest"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    buf = io.BytesIO()
    Document().save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """Generate a small RGB PNG with some dark strokes on white."""
    image = Image.new("RGB", (200, 100), "white")
    draw = ImageDraw.Draw(image)
    draw.rectangle((20, 40, 180, 60), fill="black")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def tall_png_bytes() -> bytes:
    image = Image.new("RGB", (500, 3000), "white")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _make_upload(data: bytes, mime_type: str, name: str = "resume.bin") -> FileUpload:
    return FileUpload(buffer=data, original_name=name, mime_type=mime_type, size=len(data))


@pytest.fixture()
def pdf_upload(sample_pdf_bytes: bytes) -> FileUpload:
    return _make_upload(sample_pdf_bytes, PDF_MIME_TYPE, "My Resume.pdf")


@pytest.fixture()
def docx_upload(sample_docx_bytes: bytes) -> FileUpload:
    return _make_upload(sample_docx_bytes, DOCX_MIME_TYPE, "resume.docx")


@pytest.fixture()
def png_upload(sample_png_bytes: bytes) -> FileUpload:
    return _make_upload(sample_png_bytes, "image/png", "scan.png")
