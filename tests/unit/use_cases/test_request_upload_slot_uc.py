"""Unit tests for RequestUploadSlotUseCase."""

from unittest.mock import AsyncMock

import pytest

from kycgate.application.use_cases.request_upload_slot import RequestUploadSlotUseCase
from kycgate.config.settings import UploadSettings
from kycgate.core.entities import Actor, DocumentStatus, DocumentType
from kycgate.core.exceptions import (
    CompanyNotFoundError,
    DocumentNotFoundError,
    ForbiddenError,
    InvalidDocumentTypeError,
    InvalidUploadError,
    UploadProviderError,
)
from kycgate.core.interfaces import UploadDestination


def _assign_id(document):
    document.id = 55
    return document


class TestRequestUploadSlot:
    """Tests for RequestUploadSlotUseCase."""

    def _make_use_case(self, company, replaced=None):
        store = AsyncMock()
        store.get.return_value = company

        ledger = AsyncMock()
        ledger.get.return_value = replaced
        ledger.create.side_effect = _assign_id

        provider = AsyncMock()
        provider.create_upload_destination.side_effect = lambda key, content_type, expires_in: (
            UploadDestination(
                upload_url=f"https://uploads.example/{key}?sig=x",
                file_key=key,
                expires_in=expires_in,
            )
        )

        use_case = RequestUploadSlotUseCase(
            company_store=store,
            ledger=ledger,
            upload_provider=provider,
            upload_settings=UploadSettings(url_expiry_seconds=120),
        )
        return use_case, ledger, provider

    async def test_issues_slot_and_records_document(self, sample_company):
        use_case, ledger, provider = self._make_use_case(sample_company)

        result = await use_case.execute(1, "pan", "PAN card.pdf", 4096)

        assert result.document.id == 55
        assert result.document.status == DocumentStatus.UPLOADED
        assert result.document.document_type == DocumentType.PAN
        assert result.document.file_name == "PAN_card.pdf"
        assert result.document.mime_type == "application/pdf"
        assert result.document.version == 1
        assert result.document.file_key.startswith("companies/1/pan/")
        assert result.document.file_key.endswith("-PAN_card.pdf")
        assert result.upload_url.startswith("https://uploads.example/companies/1/pan/")
        assert result.expires_in == 120
        assert result.method == "PUT"
        provider.create_upload_destination.assert_awaited_once()
        ledger.create.assert_awaited_once()

    async def test_reupload_links_rejected_record(self, sample_company, document_factory):
        rejected = document_factory(
            10, status=DocumentStatus.REJECTED, rejection_reason="blurry", version=2
        )
        use_case, _, _ = self._make_use_case(sample_company, replaced=rejected)

        result = await use_case.execute(1, "PAN", "pan.pdf", 1024, replaces_document_id=10)

        assert result.document.replaces_id == 10
        assert result.document.version == 3
        assert result.document.status == DocumentStatus.UPLOADED

    async def test_replacing_missing_document(self, sample_company):
        use_case, ledger, _ = self._make_use_case(sample_company, replaced=None)

        with pytest.raises(DocumentNotFoundError):
            await use_case.execute(1, "PAN", "pan.pdf", 1024, replaces_document_id=99)
        ledger.create.assert_not_awaited()

    async def test_replacing_document_of_other_type(self, sample_company, document_factory):
        other = document_factory(10, document_type=DocumentType.AADHAAR)
        use_case, _, _ = self._make_use_case(sample_company, replaced=other)

        with pytest.raises(InvalidUploadError):
            await use_case.execute(1, "PAN", "pan.pdf", 1024, replaces_document_id=10)

    async def test_replacing_document_of_other_company(self, sample_company, document_factory):
        other = document_factory(10, company_id=2)
        use_case, _, _ = self._make_use_case(sample_company, replaced=other)

        with pytest.raises(InvalidUploadError):
            await use_case.execute(1, "PAN", "pan.pdf", 1024, replaces_document_id=10)

    async def test_unknown_type(self, sample_company):
        use_case, _, provider = self._make_use_case(sample_company)

        with pytest.raises(InvalidDocumentTypeError):
            await use_case.execute(1, "PASSPORT", "p.pdf", 1024)
        provider.create_upload_destination.assert_not_awaited()

    async def test_invalid_file(self, sample_company):
        use_case, ledger, _ = self._make_use_case(sample_company)

        with pytest.raises(InvalidUploadError):
            await use_case.execute(1, "PAN", "pan.exe", 1024)
        ledger.create.assert_not_awaited()

    async def test_unknown_company(self):
        use_case, _, _ = self._make_use_case(None)

        with pytest.raises(CompanyNotFoundError):
            await use_case.execute(404, "PAN", "pan.pdf", 1024)

    async def test_out_of_scope_actor(self, sample_company):
        use_case, _, _ = self._make_use_case(sample_company)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                1, "PAN", "pan.pdf", 1024, actor=Actor(company_ids=frozenset({2}))
            )

    async def test_provider_failure_records_nothing(self, sample_company):
        use_case, ledger, provider = self._make_use_case(sample_company)
        provider.create_upload_destination.side_effect = UploadProviderError("timeout")

        with pytest.raises(UploadProviderError):
            await use_case.execute(1, "PAN", "pan.pdf", 1024)
        ledger.create.assert_not_awaited()
