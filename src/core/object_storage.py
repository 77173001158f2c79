"""
Object Storage for PrepPilot

Uploads recorded answers (audio/video blobs) to an S3-compatible bucket
and hands back a stable public URL for each object.
"""

import asyncio
import logging
import re
from functools import lru_cache
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.config.settings import Settings, get_settings
from src.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_EXTENSION = "webm"


@lru_cache
def get_s3_client():
    """
    S3/MinIO client with explicit credentials and path-style addressing.
    """
    settings = get_settings()
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint,
        region_name=settings.s3_region or "us-east-1",
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},  # MinIO-friendly
        ),
    )


class ObjectStorage:
    """Bucket-scoped uploads returning public URLs."""

    def __init__(self, client: Any = None, settings: Settings | None = None):
        """
        Args:
            client: boto3 S3 client (defaults to the shared one)
            settings: Application settings (bucket, public base URL)
        """
        self.settings = settings or get_settings()
        self.client = client or get_s3_client()
        self.bucket = self.settings.s3_bucket

    @staticmethod
    def media_extension(content_type: str | None) -> str:
        """File extension from a MIME type, "webm" when unknown."""
        if not content_type or "/" not in content_type:
            return DEFAULT_MEDIA_EXTENSION
        subtype = content_type.split(";", 1)[0].split("/", 1)[1].strip().lower()
        subtype = re.sub(r"^x-", "", subtype.split("+", 1)[0])
        subtype = re.sub(r"[^a-z0-9]", "", subtype)
        return subtype or DEFAULT_MEDIA_EXTENSION

    @classmethod
    def media_key(
        cls,
        interview_id: str,
        question_id: str,
        modality: str,
        content_type: str | None = None,
    ) -> str:
        """Key for a question's recording; re-recording in the same format overwrites it."""
        extension = cls.media_extension(content_type)
        return f"interviews/{interview_id}/question_{question_id}_{modality}.{extension}"

    def public_url(self, key: str) -> str:
        return f"{self.settings.public_media_base_url}/{key}"

    def _put_object(self, key: str, data: bytes, content_type: str) -> None:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store bytes under a key and return the object's public URL.

        boto3 is blocking, so the request runs in the default thread pool.

        Raises:
            StorageError: If the upload fails
        """
        try:
            # Run upload in thread pool to avoid blocking
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._put_object, key, data, content_type)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {key} to bucket {self.bucket} failed: {e}")
            raise StorageError(f"Upload to storage failed: {e}") from e

        logger.info(f"Uploaded {len(data)} bytes to {self.bucket}/{key}")
        return self.public_url(key)
