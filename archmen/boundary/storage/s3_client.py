"""
S3 client for knowledge base source files.

Uploads raw documents before they are chunked, deletes them, and builds
their public URLs.

Dependencies: boto3
System role: Object storage adapter
"""

import logging
import uuid
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from archmen.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3ContentClient:
    """S3 client for the knowledge base content bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        key_prefix: str = "content",
        s3_client=None,
    ) -> None:
        """
        Initialize S3 client for the content bucket.

        Args:
            bucket: Bucket name
            region: AWS region for the bucket
            endpoint_url: Custom S3-compatible endpoint (None for AWS)
            public_base_url: Base for public links (defaults to the bucket URL)
            key_prefix: Prefix for every object key
            s3_client: Preconfigured boto3 client (tests pass a stub)
        """
        self._bucket = bucket
        self._region = region
        self._key_prefix = key_prefix.strip("/")
        self._public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self._s3_client = s3_client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    def build_key(self, parent_kind: str, parent_id: uuid.UUID, filename: str) -> str:
        """Object key: <prefix>/<kind>/<parent id>/<random>-<filename>."""
        safe_name = filename.replace("/", "_").strip() or "upload"
        return f"{self._key_prefix}/{parent_kind}/{parent_id}/{uuid.uuid4().hex[:8]}-{safe_name}"

    def upload(
        self,
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload an object.

        Args:
            key: Object key
            body: File bytes
            content_type: MIME type stored with the object

        Returns:
            str: Public URL of the uploaded object

        Raises:
            StorageError: If the upload fails
        """
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:upload - put_object failed for {key}: {e}")
            raise StorageError(
                f"Failed to upload file: {e}",
                provider="s3",
                details={"bucket": self._bucket, "key": key},
            ) from e

        logger.info(
            f"{__name__}:upload - stored object",
            extra={"bucket": self._bucket, "key": key, "bytes": len(body)},
        )
        return self.public_url(key)

    def delete(self, key: str) -> None:
        """
        Delete an object. Deleting a missing key is not an error.

        Raises:
            StorageError: If the delete call fails
        """
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to delete file: {e}",
                provider="s3",
                details={"bucket": self._bucket, "key": key},
            ) from e

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{quote(key)}"
