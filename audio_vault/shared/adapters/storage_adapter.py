"""
Storage adapter - S3 object storage for photos.

Provides:
- Image upload returning an absolute public URL
- Deletion by public URL

Key Layout:
===========
    audio-items/3f2a9c...e1-Pioneer_SX-780.jpg
    wild-finds/<user id>/9b01d4...7c-garage_sale.png
    └─── prefix ───┘ └ uuid4 hex ┘ └ original name, spaces → _ ┘

Analysis images live under a per-user prefix, so a saved find can only
reference (and on delete, remove) an image its owner uploaded.

boto3 is synchronous, so every call runs in Starlette's threadpool to keep
the event loop free while an upload is in flight.
"""

import logging
import uuid
from typing import Optional
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from ...config.settings import settings
from ..core.exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


ITEM_PHOTO_PREFIX = "audio-items"
ANALYSIS_IMAGE_PREFIX = "wild-finds"


def analysis_prefix(user_id) -> str:
    """Key prefix of the analysis images uploaded by `user_id`."""
    return f"{ANALYSIS_IMAGE_PREFIX}/{user_id}"


@dataclass
class UploadedFile:
    """An uploaded file read into memory."""

    filename: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class StorageAdapter:
    """
    Adapter for S3 (or S3-compatible) photo storage.

    Handles:
    - Content type and size checks before anything is sent
    - Object key generation
    - Mapping stored keys to and from public URLs
    """

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        region: Optional[str] = None,
        public_base_url: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        """
        Initialize storage adapter.

        Args:
            bucket_name: Target bucket
            region: AWS region
            public_base_url: Prefix turning a key into a public URL
            endpoint_url: Custom endpoint for S3-compatible stores
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
        """
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.region = region or settings.AWS_REGION
        self.public_base_url = (public_base_url or settings.storage_public_base_url).rstrip("/")
        self.endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL or None
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            kwargs = {"region_name": self.region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self.aws_access_key_id and self.aws_secret_access_key:
                kwargs["aws_access_key_id"] = self.aws_access_key_id
                kwargs["aws_secret_access_key"] = self.aws_secret_access_key
            # Without explicit keys boto3 falls back to IAM role / environment
            self._client = boto3.client("s3", **kwargs)
        return self._client

    # ═══════════════════════════════════════════════════════════════════════════
    # KEYS & URLS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def build_key(filename: str, prefix: str = ITEM_PHOTO_PREFIX) -> str:
        safe_name = (filename or "upload").replace(" ", "_")
        return f"{prefix}/{uuid.uuid4().hex}-{safe_name}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        """Object key of a URL produced by this adapter, None for foreign URLs."""
        prefix = f"{self.public_base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    def is_under(self, url: str, prefix: str) -> bool:
        """True when `url` is an object of this bucket stored below `prefix`."""
        key = self.key_from_url(url)
        return key is not None and key.startswith(f"{prefix.rstrip('/')}/")

    # ═══════════════════════════════════════════════════════════════════════════
    # OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def upload_image(
        self,
        upload: UploadedFile,
        prefix: str = ITEM_PHOTO_PREFIX,
        max_bytes: Optional[int] = None,
    ) -> str:
        """
        Store an image and return its public URL.

        Raises:
            ValidationError: Not an image, empty, or larger than max_bytes
            ExternalServiceError: The store rejected the upload
        """
        data, content_type = upload.data, upload.content_type
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("Not an image! Please upload an image file.")
        if not data:
            raise ValidationError("Uploaded image is empty.")
        limit = max_bytes or settings.MAX_PHOTO_BYTES
        if len(data) > limit:
            raise ValidationError(
                "Image is too large.",
                details={"maxBytes": limit, "receivedBytes": len(data)},
            )

        key = self.build_key(upload.filename, prefix)
        try:
            await run_in_threadpool(self._put_object, key, data, content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload %s to bucket %s: %s", key, self.bucket_name, e)
            raise ExternalServiceError("storage", "Failed to store the uploaded image.") from e

        logger.info("Stored object %s (%d bytes)", key, len(data))
        return self.public_url(key)

    async def delete(self, url: str) -> bool:
        """
        Delete the object behind a public URL.

        Returns:
            False when the URL does not belong to this bucket

        Raises:
            ExternalServiceError: The store rejected the delete
        """
        key = self.key_from_url(url)
        if key is None:
            logger.warning("Skipping delete of foreign URL %s", url)
            return False

        try:
            await run_in_threadpool(self._delete_object, key)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to delete %s from bucket %s: %s", key, self.bucket_name, e)
            raise ExternalServiceError("storage", "Failed to delete the stored image.") from e

        logger.info("Deleted object %s", key)
        return True

    async def delete_quietly(self, urls: list[str]) -> int:
        """
        Delete several objects, logging failures instead of raising.

        Used when removing an item or find: the database row goes away even
        if a photo cannot be removed. Returns the number deleted.
        """
        deleted = 0
        for url in urls:
            try:
                if await self.delete(url):
                    deleted += 1
            except ExternalServiceError as e:
                logger.warning("Photo cleanup failed for %s: %s", url, e.message)
        return deleted

    # ═══════════════════════════════════════════════════════════════════════════
    # BLOCKING S3 CALLS
    # ═══════════════════════════════════════════════════════════════════════════

    def _put_object(self, key: str, data: bytes, content_type: str) -> None:
        self.client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
        )

    def _delete_object(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket_name, Key=key)


# Singleton instance
_storage_adapter: Optional[StorageAdapter] = None


def get_storage_adapter() -> StorageAdapter:
    """Get or create storage adapter singleton."""
    global _storage_adapter
    if _storage_adapter is None:
        _storage_adapter = StorageAdapter()
    return _storage_adapter
