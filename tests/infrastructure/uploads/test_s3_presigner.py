"""Tests for the S3 presigned upload provider."""

from unittest.mock import MagicMock
from urllib.parse import urlparse

import pytest
from botocore.exceptions import ClientError

from kycgate.config import get_settings
from kycgate.core.exceptions import UploadProviderError
from kycgate.infrastructure.uploads import S3UploadSlotProvider, create_upload_provider


@pytest.fixture
def provider() -> S3UploadSlotProvider:
    # Presigning is local; no request reaches the endpoint
    return S3UploadSlotProvider(
        bucket="kyc-test",
        region="us-east-1",
        endpoint_url="https://s3.test.example",
        access_key="AKIATESTKEY",
        secret_key="test-secret",
    )


class TestS3UploadSlotProvider:
    async def test_presigned_put(self, provider):
        destination = await provider.create_upload_destination(
            "companies/1/pan/abc-pan.pdf", content_type="application/pdf", expires_in=300
        )

        parsed = urlparse(destination.upload_url)
        assert parsed.scheme == "https"
        assert "companies/1/pan/abc-pan.pdf" in parsed.path
        assert "AKIATESTKEY" in parsed.query
        assert destination.file_key == "companies/1/pan/abc-pan.pdf"
        assert destination.expires_in == 300
        assert destination.method == "PUT"

    async def test_client_error_becomes_provider_error(self, provider):
        provider._client = MagicMock()
        provider._client.generate_presigned_url.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )

        with pytest.raises(UploadProviderError):
            await provider.create_upload_destination("k", "application/pdf", 60)


class TestCreateUploadProvider:
    def test_from_settings(self, monkeypatch):
        settings = get_settings()
        monkeypatch.setattr(settings.upload, "bucket", "docs-bucket")
        monkeypatch.setattr(settings.upload, "endpoint_url", "https://r2.test.example")

        provider = create_upload_provider(settings)

        assert provider.bucket == "docs-bucket"
        assert provider.endpoint_url == "https://r2.test.example"
