from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for all durable object storage adapters.

    Every provider failure must surface as StorageError.
    """

    @abstractmethod
    def put(self, path: str, data: bytes, content_type: str) -> str:
        """Write bytes at path and return the object's stable URL.

        Raises:
            StorageError: if the write is not confirmed.
        """

    @abstractmethod
    def make_public(self, path: str) -> None:
        """Grant anonymous read access to the object at path."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the object at path."""

    @abstractmethod
    def url_for(self, path: str) -> str:
        """Return the public URL of the object at path."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Write, publish and return the public URL."""
        url = self.put(path, data, content_type)
        self.make_public(path)
        return url
