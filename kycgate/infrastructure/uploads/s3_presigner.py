"""
S3-compatible presigned upload destinations (AWS S3, R2, MinIO).

boto3 is synchronous; presigning runs in a worker thread so the event loop
is never blocked.
"""

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from kycgate.config import get_logger
from kycgate.core.exceptions import UploadProviderError
from kycgate.core.interfaces.uploads import IUploadSlotProvider, UploadDestination

logger = get_logger(__name__)


class S3UploadSlotProvider(IUploadSlotProvider):
    """Issues presigned PUT URLs for direct client uploads."""

    def __init__(
        self,
        bucket: str,
        region: str = "auto",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def create_upload_destination(
        self,
        file_key: str,
        content_type: str,
        expires_in: int,
    ) -> UploadDestination:
        def _presign() -> str:
            return self._client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": file_key,
                    "ContentType": content_type,
                },
                ExpiresIn=expires_in,
            )

        try:
            url = await asyncio.to_thread(_presign)
        except (BotoCoreError, ClientError) as e:
            logger.error("upload_presign_failed", file_key=file_key, error=str(e))
            raise UploadProviderError(str(e)) from e

        logger.debug("upload_presigned", file_key=file_key, expires_in=expires_in)
        return UploadDestination(upload_url=url, file_key=file_key, expires_in=expires_in)
