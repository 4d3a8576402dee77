import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docingest.config.settings import PDF_MIME_TYPE, Settings
from docingest.processor.models import FileUpload, ProcessedFile
from docingest.processor.processor import build_processor
from docingest.storage.memory_adapter import InMemoryBlobStore
from docingest.worker.pool import ProcessingPool

CALLS = 50


def _make_pdf(text: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, text)
    c.save()
    return buf.getvalue()


@pytest.mark.integration
class TestConcurrentProcessing:
    def test_parallel_calls_do_not_interfere(
        self, settings: Settings, blob_store: InMemoryBlobStore
    ) -> None:
        processor = build_processor(settings, blob_store=blob_store)
        items = []
        for i in range(CALLS):
            data = _make_pdf(f"Candidate number {i}")
            upload = FileUpload(
                buffer=data, original_name=f"cv-{i}.pdf", mime_type=PDF_MIME_TYPE, size=len(data)
            )
            items.append((upload, f"user-{i}"))

        with ProcessingPool(processor, max_workers=8) as pool:
            results = pool.process_many(items)

        assert all(isinstance(r, ProcessedFile) for r in results)
        processed = [r for r in results if isinstance(r, ProcessedFile)]
        assert len({r.id for r in processed}) == CALLS
        for i, result in enumerate(processed):
            assert result.text.strip() == f"Candidate number {i}"
            assert result.original_name == f"cv-{i}.pdf"
            assert f"/user-{i}/{result.id}_cv-{i}.pdf" in result.download_url

        stored = blob_store.paths()
        assert len(stored) == CALLS
        for i, result in enumerate(processed):
            assert blob_store.get(f"cv-documents/user-{i}/{result.id}_cv-{i}.pdf").data == items[i][0].buffer
