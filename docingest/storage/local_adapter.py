from pathlib import Path

from docingest.logging.logger import Log
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError


class LocalBlobStore(BaseBlobStore):
    """Stores objects as files under a root directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None, public_base_url: str = "") -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._public_base_url = public_base_url.rstrip("/")

    def put(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to upload file to storage: {exc}", path) from exc
        Log.debug(f"Stored {len(data)} bytes ({content_type}) at {target}")
        return self.url_for(path)

    def make_public(self, path: str) -> None:
        if not self._resolve_path(path).exists():
            raise StorageError(f"Cannot publish missing object: {path}", path)

    def delete(self, path: str) -> None:
        target = self._resolve_path(path)
        try:
            target.unlink()
        except OSError as exc:
            raise StorageError(f"Failed to delete file from storage: {exc}", path) from exc

    def url_for(self, path: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{path}"
        return self._resolve_path(path).as_uri()

    def _resolve_path(self, path: str) -> Path:
        root = self._files_root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise StorageError(f"Path escapes storage root: {path}", path)
        return target
