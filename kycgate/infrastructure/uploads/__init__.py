"""Direct-upload slot providers."""

from kycgate.config import get_settings
from kycgate.config.settings import Settings
from kycgate.infrastructure.uploads.s3_presigner import S3UploadSlotProvider

_provider: S3UploadSlotProvider | None = None


def create_upload_provider(settings: Settings | None = None) -> S3UploadSlotProvider:
    """Build an S3 upload provider from settings."""
    s = settings or get_settings()
    return S3UploadSlotProvider(
        bucket=s.upload.bucket,
        region=s.upload.region,
        endpoint_url=s.upload.endpoint_url,
        access_key=s.upload.access_key_id,
        secret_key=s.upload.secret_access_key,
    )


def get_upload_provider() -> S3UploadSlotProvider:
    """Get singleton upload provider instance."""
    global _provider
    if _provider is None:
        _provider = create_upload_provider()
    return _provider


__all__ = [
    "S3UploadSlotProvider",
    "create_upload_provider",
    "get_upload_provider",
]
