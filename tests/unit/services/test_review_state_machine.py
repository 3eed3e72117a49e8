"""Tests for the document review state machine."""

from unittest.mock import AsyncMock

import pytest

from kycgate.core.entities import Actor, AuditAction, DocumentStatus, ReviewDecision
from kycgate.core.exceptions import (
    ConcurrentModificationError,
    DocumentNotFoundError,
    DocumentNotReviewableError,
    ForbiddenError,
    InvalidReviewDecisionError,
    RejectionReasonRequiredError,
)
from kycgate.core.services.review_state_machine import (
    DocumentReviewService,
    normalize_reason,
    parse_decision,
    plan_review,
)


class TestPlanReview:
    """Validation without storage."""

    def test_approve_uploaded(self, document_factory):
        plan = plan_review(document_factory(), ReviewDecision.APPROVE)
        assert plan.previous_status == DocumentStatus.UPLOADED
        assert plan.new_status == DocumentStatus.VERIFIED
        assert plan.rejection_reason is None

    def test_reject_with_reason(self, document_factory):
        plan = plan_review(document_factory(), "reject", "  Image is blurry  ")
        assert plan.new_status == DocumentStatus.REJECTED
        assert plan.rejection_reason == "Image is blurry"

    @pytest.mark.parametrize("reason", [None, "", "   ", "\n\t"])
    def test_reject_without_reason(self, document_factory, reason):
        with pytest.raises(RejectionReasonRequiredError):
            plan_review(document_factory(), ReviewDecision.REJECT, reason)

    def test_approve_ignores_reason(self, document_factory):
        plan = plan_review(document_factory(), ReviewDecision.APPROVE, "looks fine")
        assert plan.rejection_reason is None

    def test_verified_is_terminal(self, document_factory):
        doc = document_factory(status=DocumentStatus.VERIFIED)
        with pytest.raises(DocumentNotReviewableError):
            plan_review(doc, ReviewDecision.REJECT, "changed my mind")

    def test_rejected_can_be_corrected(self, document_factory):
        doc = document_factory(status=DocumentStatus.REJECTED, rejection_reason="blurry")
        plan = plan_review(doc, ReviewDecision.APPROVE)
        assert plan.previous_status == DocumentStatus.REJECTED
        assert plan.new_status == DocumentStatus.VERIFIED

    def test_unknown_decision(self, document_factory):
        with pytest.raises(InvalidReviewDecisionError):
            plan_review(document_factory(), "MAYBE")


class TestHelpers:
    def test_parse_decision_case_insensitive(self):
        assert parse_decision(" approve ") == ReviewDecision.APPROVE

    def test_normalize_reason(self):
        assert normalize_reason("  x ") == "x"
        assert normalize_reason("   ") is None
        assert normalize_reason(None) is None


class TestDocumentReviewService:
    """Tests for DocumentReviewService against a mocked ledger."""

    def _make_ledger(self, document, updated=None):
        ledger = AsyncMock()
        ledger.get.return_value = document
        ledger.record_review.return_value = updated
        return ledger

    async def test_approve(self, document_factory):
        doc = document_factory()
        updated = document_factory(status=DocumentStatus.VERIFIED, reviewed_by="admin-1")
        ledger = self._make_ledger(doc, updated)
        service = DocumentReviewService(ledger)

        result = await service.review(
            doc.id, ReviewDecision.APPROVE, actor=Actor(actor_id="admin-1")
        )

        assert result.status == DocumentStatus.VERIFIED
        kwargs = ledger.record_review.call_args.kwargs
        assert kwargs["expected_status"] == DocumentStatus.UPLOADED
        assert kwargs["new_status"] == DocumentStatus.VERIFIED
        assert kwargs["reviewed_by"] == "admin-1"
        audit = kwargs["audit"]
        assert audit.action == AuditAction.DOCUMENT_REVIEWED
        assert audit.entity_id == doc.id
        assert audit.actor_id == "admin-1"
        assert audit.details["previous_status"] == "UPLOADED"
        assert audit.details["status"] == "VERIFIED"

    async def test_not_found(self):
        service = DocumentReviewService(self._make_ledger(None))
        with pytest.raises(DocumentNotFoundError):
            await service.review(99, ReviewDecision.APPROVE)

    async def test_forbidden_actor(self, document_factory):
        ledger = self._make_ledger(document_factory(company_id=1))
        service = DocumentReviewService(ledger)

        with pytest.raises(ForbiddenError):
            await service.review(10, ReviewDecision.APPROVE, actor=Actor(company_ids=frozenset({2})))
        ledger.record_review.assert_not_awaited()

    async def test_blank_reason_does_not_write(self, document_factory):
        ledger = self._make_ledger(document_factory())
        service = DocumentReviewService(ledger)

        with pytest.raises(RejectionReasonRequiredError):
            await service.review(10, ReviewDecision.REJECT, rejection_reason="  ")
        ledger.record_review.assert_not_awaited()

    async def test_verified_does_not_write(self, document_factory):
        ledger = self._make_ledger(document_factory(status=DocumentStatus.VERIFIED))
        service = DocumentReviewService(ledger)

        with pytest.raises(DocumentNotReviewableError):
            await service.review(10, ReviewDecision.APPROVE)
        ledger.record_review.assert_not_awaited()

    async def test_lost_guard_is_conflict(self, document_factory):
        """A concurrent review changed the status first."""
        ledger = self._make_ledger(document_factory(), updated=None)
        service = DocumentReviewService(ledger)

        with pytest.raises(ConcurrentModificationError):
            await service.review(10, ReviewDecision.APPROVE)

    async def test_admin_remarks_are_trimmed(self, document_factory):
        updated = document_factory(status=DocumentStatus.VERIFIED)
        ledger = self._make_ledger(document_factory(), updated)

        await DocumentReviewService(ledger).review(
            10, ReviewDecision.APPROVE, admin_remarks="  checked against registry  "
        )

        assert ledger.record_review.call_args.kwargs["admin_remarks"] == "checked against registry"
