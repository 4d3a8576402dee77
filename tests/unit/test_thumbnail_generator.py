import io
from unittest.mock import MagicMock, patch

from PIL import Image

from docingest.storage.exceptions import StorageError
from docingest.storage.memory_adapter import InMemoryBlobStore
from docingest.thumbnail.generator import ThumbnailGenerator


def _make_generator(store: InMemoryBlobStore | MagicMock) -> ThumbnailGenerator:
    return ThumbnailGenerator(store, prefix="cv-documents", width=300, height=400, quality=80)


class TestThumbnailGenerator:
    def test_uploads_jpeg_under_thumbnails(self, sample_png_bytes: bytes) -> None:
        store = InMemoryBlobStore(bucket="b")
        url = _make_generator(store).generate(sample_png_bytes, "user-1", "file-1")

        path = "cv-documents/user-1/thumbnails/file-1_thumb.jpg"
        assert url == f"memory://b/{path}"
        stored = store.get(path)
        assert stored.content_type == "image/jpeg"
        assert Image.open(io.BytesIO(stored.data)).format == "JPEG"

    def test_fits_inside_box(self, tall_png_bytes: bytes) -> None:
        thumbnail = _make_generator(InMemoryBlobStore()).render(tall_png_bytes)
        width, height = Image.open(io.BytesIO(thumbnail)).size
        assert width <= 300 and height <= 400
        assert height == 400

    def test_never_upscales(self, sample_png_bytes: bytes) -> None:
        thumbnail = _make_generator(InMemoryBlobStore()).render(sample_png_bytes)
        assert Image.open(io.BytesIO(thumbnail)).size == (200, 100)

    def test_invalid_image_returns_empty_url(self) -> None:
        store = InMemoryBlobStore()
        with patch("docingest.thumbnail.generator.Log") as mock_log:
            url = _make_generator(store).generate(b"not an image", "user-1", "file-1")
        assert url == ""
        assert store.paths() == []
        mock_log.warning.assert_called_once()

    def test_upload_failure_returns_empty_url(self, sample_png_bytes: bytes) -> None:
        store = MagicMock()
        store.upload.side_effect = StorageError("bucket unavailable")
        assert _make_generator(store).generate(sample_png_bytes, "user-1", "file-1") == ""
