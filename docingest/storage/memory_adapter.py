"""In-process blob store.

No network or disk access. Useful for local development and tests; the
stored objects live only as long as the adapter instance.
"""

import threading
from dataclasses import dataclass

from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError


@dataclass
class StoredObject:
    data: bytes
    content_type: str
    public: bool = False


class InMemoryBlobStore(BaseBlobStore):
    """Thread-safe dict-backed blob store."""

    def __init__(self, bucket: str = "memory") -> None:
        self._bucket = bucket
        self._objects: dict[str, StoredObject] = {}
        self._lock = threading.Lock()

    def put(self, path: str, data: bytes, content_type: str) -> str:
        with self._lock:
            self._objects[path] = StoredObject(data=data, content_type=content_type)
        return self.url_for(path)

    def make_public(self, path: str) -> None:
        with self._lock:
            stored = self._objects.get(path)
            if stored is None:
                raise StorageError(f"Cannot publish missing object: {path}", path)
            stored.public = True

    def delete(self, path: str) -> None:
        with self._lock:
            if self._objects.pop(path, None) is None:
                raise StorageError(f"Failed to delete file from storage: {path} not found", path)

    def url_for(self, path: str) -> str:
        return f"memory://{self._bucket}/{path}"

    def get(self, path: str) -> StoredObject:
        with self._lock:
            stored = self._objects.get(path)
        if stored is None:
            raise StorageError(f"Object not found: {path}", path)
        return stored

    def paths(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)
