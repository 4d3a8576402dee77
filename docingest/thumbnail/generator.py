import io

from PIL import Image

from docingest.logging.logger import Log
from docingest.storage.base import BaseBlobStore
from docingest.storage.paths import thumbnail_path


class ThumbnailGenerator:
    """Derives a JPEG preview for image uploads.

    Best-effort: any failure is logged and reported as an empty URL so the
    primary extraction result is never lost.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        *,
        prefix: str,
        width: int = 300,
        height: int = 400,
        quality: int = 80,
    ) -> None:
        self._blob_store = blob_store
        self._prefix = prefix
        self._size = (width, height)
        self._quality = quality

    def generate(self, data: bytes, user_id: str, file_id: str) -> str:
        try:
            thumbnail = self.render(data)
            path = thumbnail_path(self._prefix, user_id, file_id)
            return self._blob_store.upload(path, thumbnail, "image/jpeg")
        except Exception as exc:
            Log.warning(f"Thumbnail generation failed for file {file_id} (user {user_id}): {exc}")
            return ""

    def render(self, data: bytes) -> bytes:
        """Fit inside the bounding box without upscaling and encode as JPEG."""
        with Image.open(io.BytesIO(data)) as image:
            preview = image.convert("RGB")
            preview.thumbnail(self._size, Image.Resampling.LANCZOS)
            buf = io.BytesIO()
            preview.save(buf, format="JPEG", quality=self._quality)
        return buf.getvalue()
