from datetime import datetime, timezone
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError


class S3BlobStore(BaseBlobStore):
    """Stores objects in an S3 bucket via boto3."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str = "",
        public_base_url: str = "",
        client: Any | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("storage_bucket is required for storage_backend=s3")
        self._bucket = bucket
        self._region = region
        self._public_base_url = public_base_url.rstrip("/")
        self._client = client or boto3.client("s3", region_name=region or None)

    def put(self, path: str, data: bytes, content_type: str) -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                Metadata={"uploadedAt": datetime.now(timezone.utc).isoformat()},
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to upload file to storage: {exc}", path) from exc
        return self.url_for(path)

    def make_public(self, path: str) -> None:
        try:
            self._client.put_object_acl(Bucket=self._bucket, Key=path, ACL="public-read")
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to make file public: {exc}", path) from exc

    def delete(self, path: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=path)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to delete file from storage: {exc}", path) from exc

    def url_for(self, path: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{path}"
        if self._region:
            return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{path}"
        return f"https://{self._bucket}.s3.amazonaws.com/{path}"
