"""Tests for compliance evaluation."""

from unittest.mock import AsyncMock

from kycgate.core.entities import DocumentStatus, DocumentType
from kycgate.core.services import ComplianceEvaluator, evaluate_compliance


class TestEvaluateCompliance:
    """Tests for the pure evaluation function."""

    def test_all_required_verified(self, document_factory):
        docs = [
            document_factory(1, document_type=DocumentType.AADHAAR, status=DocumentStatus.VERIFIED),
            document_factory(2, document_type=DocumentType.PAN, status=DocumentStatus.VERIFIED),
        ]
        result = evaluate_compliance(1, {DocumentType.AADHAAR, DocumentType.PAN}, docs)

        assert result.is_compliant
        assert result.missing_document_types == []
        assert result.required_document_types == [DocumentType.AADHAAR, DocumentType.PAN]

    def test_uploaded_and_rejected_do_not_count(self, document_factory):
        docs = [
            document_factory(1, document_type=DocumentType.PAN, status=DocumentStatus.UPLOADED),
            document_factory(2, document_type=DocumentType.PAN, status=DocumentStatus.REJECTED),
        ]
        result = evaluate_compliance(1, {DocumentType.PAN}, docs)

        assert not result.is_compliant
        assert result.missing_document_types == [DocumentType.PAN]
        assert result.approved_document_types == []

    def test_rejected_alongside_verified_does_not_hurt(self, document_factory):
        docs = [
            document_factory(1, document_type=DocumentType.PAN, status=DocumentStatus.REJECTED),
            document_factory(2, document_type=DocumentType.PAN, status=DocumentStatus.VERIFIED),
        ]
        assert evaluate_compliance(1, {DocumentType.PAN}, docs).is_compliant

    def test_empty_registry_is_compliant(self):
        """With nothing required, every company is compliant."""
        result = evaluate_compliance(1, set(), [])
        assert result.is_compliant
        assert result.required_document_types == []

    def test_verified_unrequired_types_are_listed_as_approved(self, document_factory):
        docs = [document_factory(1, document_type=DocumentType.LICENSE, status=DocumentStatus.VERIFIED)]
        result = evaluate_compliance(1, {DocumentType.PAN}, docs)

        assert result.approved_document_types == [DocumentType.LICENSE]
        assert result.missing_document_types == [DocumentType.PAN]

    def test_missing_is_sorted(self):
        result = evaluate_compliance(
            1, {DocumentType.PAN, DocumentType.AADHAAR, DocumentType.KYC}, []
        )
        assert result.missing_document_types == [
            DocumentType.AADHAAR,
            DocumentType.KYC,
            DocumentType.PAN,
        ]


class TestComplianceEvaluator:
    """Tests for the registry/ledger backed evaluator."""

    def _make_evaluator(self, required, documents):
        registry = AsyncMock()
        registry.list_required_types.return_value = set(required)
        ledger = AsyncMock()
        ledger.list_by_company.return_value = documents
        return ComplianceEvaluator(registry, ledger), registry, ledger

    async def test_evaluate(self, document_factory):
        evaluator, _, ledger = self._make_evaluator(
            {DocumentType.PAN},
            [document_factory(document_type=DocumentType.PAN, status=DocumentStatus.VERIFIED)],
        )

        result = await evaluator.evaluate(1)

        assert result.is_compliant
        ledger.list_by_company.assert_awaited_once_with(1)

    async def test_evaluate_unknown_company(self):
        """Unknown companies evaluate over an empty ledger instead of failing."""
        evaluator, _, _ = self._make_evaluator({DocumentType.PAN}, [])

        result = await evaluator.evaluate(404)

        assert result.company_id == 404
        assert result.missing_document_types == [DocumentType.PAN]

    async def test_evaluate_is_idempotent(self, document_factory):
        evaluator, _, _ = self._make_evaluator(
            {DocumentType.AADHAAR, DocumentType.PAN},
            [document_factory(document_type=DocumentType.PAN, status=DocumentStatus.VERIFIED)],
        )

        first = await evaluator.evaluate(1)
        second = await evaluator.evaluate(1)

        assert first == second

    async def test_evaluate_with_documents_returns_snapshot(self, document_factory):
        docs = [document_factory()]
        evaluator, _, _ = self._make_evaluator({DocumentType.PAN}, docs)

        compliance, snapshot = await evaluator.evaluate_with_documents(1)

        assert snapshot == docs
        assert not compliance.is_compliant
