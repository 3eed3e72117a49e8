"""Unit tests for ReviewDocumentUseCase."""

from unittest.mock import AsyncMock

import pytest

from kycgate.application.use_cases.manage_companies import ManageCompaniesUseCase
from kycgate.application.use_cases.review_document import ReviewDocumentUseCase
from kycgate.core.entities import (
    Actor,
    DocumentStatus,
    DocumentType,
    NotificationEvent,
    OnboardingState,
    OnboardingStatus,
)
from kycgate.core.exceptions import (
    CompanyNotFoundError,
    DatabaseError,
    DocumentNotFoundError,
    ForbiddenError,
    RejectionReasonRequiredError,
)
from kycgate.core.services import ActivationOutcome


class TestReviewDocument:
    """Tests for the review flow and its reactions."""

    def _make_use_case(self, document, reviewed, company, activated=None, refetched=None):
        ledger = AsyncMock()
        ledger.get.return_value = document
        ledger.record_review.return_value = reviewed
        # before read, activation re-check, after read
        ledger.list_by_company.side_effect = [[document], [reviewed], [reviewed]]

        store = AsyncMock()
        store.get.side_effect = [company, company] + ([refetched] if refetched else [])
        store.compare_and_set_status.return_value = activated

        registry = AsyncMock()
        registry.list_required_types.return_value = {DocumentType.PAN}

        notifier = AsyncMock()
        use_case = ReviewDocumentUseCase(
            ledger=ledger, company_store=store, registry=registry, notifier=notifier
        )
        return use_case, ledger, store, notifier

    @staticmethod
    def _events(notifier) -> list[NotificationEvent]:
        return [c.args[0].event for c in notifier.notify.call_args_list]

    async def test_approving_last_missing_document_activates(
        self, today, company_factory, document_factory
    ):
        doc = document_factory()
        reviewed = document_factory(status=DocumentStatus.VERIFIED)
        activated = company_factory(status=OnboardingStatus.COMPLETED, status_version=1)
        use_case, _, store, notifier = self._make_use_case(
            doc, reviewed, company_factory(), activated=activated
        )

        result = await use_case.execute(doc.id, "APPROVE", actor=Actor(actor_id="a1"), today=today)

        assert result.document.status == DocumentStatus.VERIFIED
        assert result.previous_state == OnboardingState.PENDING_APPROVAL
        assert result.onboarding_state == OnboardingState.COMPLIANT
        assert result.stage_changed
        assert result.activated
        assert result.activation.outcome == ActivationOutcome.ACTIVATED
        store.compare_and_set_status.assert_awaited_once()
        assert self._events(notifier) == [
            NotificationEvent.COMPANY_ACTIVATED,
            NotificationEvent.DOCUMENT_APPROVED,
            NotificationEvent.STAGE_CHANGED,
        ]

    async def test_rejection_publishes_reason(self, today, company_factory, document_factory):
        doc = document_factory()
        reviewed = document_factory(status=DocumentStatus.REJECTED, rejection_reason="Blurry scan")
        use_case, _, store, notifier = self._make_use_case(doc, reviewed, company_factory())

        result = await use_case.execute(
            doc.id, "REJECT", rejection_reason="Blurry scan", today=today
        )

        assert result.onboarding_state == OnboardingState.MISSING_DOCUMENTS
        assert result.activation.outcome == ActivationOutcome.NOT_COMPLIANT
        assert not result.activated
        store.compare_and_set_status.assert_not_awaited()

        rejected = notifier.notify.call_args_list[0].args[0]
        assert rejected.event == NotificationEvent.DOCUMENT_REJECTED
        assert rejected.payload["rejection_reason"] == "Blurry scan"
        assert self._events(notifier)[-1] == NotificationEvent.STAGE_CHANGED

    async def test_activation_conflict_keeps_review(self, today, company_factory, document_factory):
        """A company rejected mid-review is not activated; the review stands."""
        doc = document_factory()
        reviewed = document_factory(status=DocumentStatus.VERIFIED)
        use_case, _, _, notifier = self._make_use_case(
            doc,
            reviewed,
            company_factory(),
            activated=None,
            refetched=company_factory(status=OnboardingStatus.REJECTED, status_version=1),
        )

        result = await use_case.execute(doc.id, "APPROVE", today=today)

        assert result.document.status == DocumentStatus.VERIFIED
        assert result.activation is None
        assert NotificationEvent.COMPANY_ACTIVATED not in self._events(notifier)

    async def test_activation_storage_failure_is_deferred(
        self, today, company_factory, document_factory
    ):
        """A failed activation write leaves the committed review; activate retries it."""
        doc = document_factory()
        reviewed = document_factory(status=DocumentStatus.VERIFIED)
        company = company_factory()
        use_case, ledger, store, notifier = self._make_use_case(doc, reviewed, company)
        store.compare_and_set_status.side_effect = DatabaseError("transaction", "disk I/O error")

        result = await use_case.execute(doc.id, "APPROVE", today=today)

        assert result.document.status == DocumentStatus.VERIFIED
        assert result.activation is None
        assert self._events(notifier)[0] == NotificationEvent.DOCUMENT_APPROVED
        assert NotificationEvent.COMPANY_ACTIVATED not in self._events(notifier)

        ledger.list_by_company.side_effect = None
        ledger.list_by_company.return_value = [reviewed]
        store.get.side_effect = None
        store.get.return_value = company
        store.compare_and_set_status.side_effect = None
        store.compare_and_set_status.return_value = company_factory(
            status=OnboardingStatus.COMPLETED, status_version=1
        )
        registry = AsyncMock()
        registry.list_required_types.return_value = {DocumentType.PAN}
        companies = ManageCompaniesUseCase(
            company_store=store, registry=registry, ledger=ledger, notifier=notifier
        )

        retried = await companies.activate(company.id)

        assert retried.activated
        assert self._events(notifier)[-1] == NotificationEvent.COMPANY_ACTIVATED

    async def test_document_not_found(self):
        ledger = AsyncMock()
        ledger.get.return_value = None
        use_case = ReviewDocumentUseCase(
            ledger=ledger, company_store=AsyncMock(), registry=AsyncMock(), notifier=AsyncMock()
        )

        with pytest.raises(DocumentNotFoundError):
            await use_case.execute(404, "APPROVE")

    async def test_out_of_scope_actor(self, document_factory):
        ledger = AsyncMock()
        ledger.get.return_value = document_factory(company_id=1)
        store = AsyncMock()
        use_case = ReviewDocumentUseCase(
            ledger=ledger, company_store=store, registry=AsyncMock(), notifier=AsyncMock()
        )

        with pytest.raises(ForbiddenError):
            await use_case.execute(10, "APPROVE", actor=Actor(company_ids=frozenset({2})))
        store.get.assert_not_awaited()
        ledger.record_review.assert_not_awaited()

    async def test_missing_company(self, document_factory):
        ledger = AsyncMock()
        ledger.get.return_value = document_factory()
        store = AsyncMock()
        store.get.return_value = None
        use_case = ReviewDocumentUseCase(
            ledger=ledger, company_store=store, registry=AsyncMock(), notifier=AsyncMock()
        )

        with pytest.raises(CompanyNotFoundError):
            await use_case.execute(10, "APPROVE")

    async def test_blank_reason_changes_nothing(self, today, company_factory, document_factory):
        doc = document_factory()
        use_case, ledger, store, notifier = self._make_use_case(doc, doc, company_factory())

        with pytest.raises(RejectionReasonRequiredError):
            await use_case.execute(doc.id, "REJECT", rejection_reason="   ", today=today)

        ledger.record_review.assert_not_awaited()
        store.compare_and_set_status.assert_not_awaited()
        notifier.notify.assert_not_awaited()
