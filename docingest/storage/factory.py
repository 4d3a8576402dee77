from pathlib import Path

from docingest.config.settings import Settings
from docingest.storage.base import BaseBlobStore
from docingest.storage.local_adapter import LocalBlobStore
from docingest.storage.memory_adapter import InMemoryBlobStore
from docingest.storage.s3_adapter import S3BlobStore


class BlobStoreFactory:
    """Creates the configured blob store adapter."""

    BACKENDS = ("local", "s3", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStore(
                files_root=Path(settings.storage_root),
                public_base_url=settings.storage_public_base_url,
            )
        if backend == "s3":
            return S3BlobStore(
                bucket=settings.storage_bucket,
                region=settings.storage_region,
                public_base_url=settings.storage_public_base_url,
            )
        if backend == "memory":
            return InMemoryBlobStore(bucket=settings.storage_bucket or "memory")
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
