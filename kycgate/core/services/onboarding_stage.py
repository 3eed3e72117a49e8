"""
Onboarding stage derivation.

Rules are evaluated in a fixed order and the first match wins:

1. renewal_expired   - renewal day is before today, even if compliant
2. compliant         - nothing missing
3. pending_approval  - every missing type has an UPLOADED document
4. missing_documents - at least one missing type has nothing pending
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from kycgate.core.entities.company import CompanyProfile
from kycgate.core.entities.compliance import ComplianceStatus, OnboardingState
from kycgate.core.entities.document import Document, DocumentType
from kycgate.core.services.compliance_evaluator import ComplianceEvaluator


def is_renewal_expired(renewal_date: date | datetime | None, today: date) -> bool:
    """Compare at day granularity; time of day is ignored."""
    if renewal_date is None:
        return False
    if isinstance(renewal_date, datetime):
        renewal_date = renewal_date.date()
    if isinstance(today, datetime):
        today = today.date()
    return renewal_date < today


def has_pending_uploads_for_missing(
    missing_types: Iterable[DocumentType],
    documents: Iterable[Document],
) -> bool:
    """True if every missing type has at least one UPLOADED document."""
    missing = set(missing_types)
    if not missing:
        return False
    pending_types = {d.document_type for d in documents if d.is_pending}
    return missing <= pending_types


def derive_onboarding_state(
    compliance: ComplianceStatus,
    renewal_date: date | datetime | None,
    documents: Iterable[Document],
    today: date,
) -> OnboardingState:
    """Derive the client-facing onboarding state. Pure and total."""
    if is_renewal_expired(renewal_date, today):
        return OnboardingState.RENEWAL_EXPIRED
    if compliance.is_compliant:
        return OnboardingState.COMPLIANT
    if has_pending_uploads_for_missing(compliance.missing_document_types, documents):
        return OnboardingState.PENDING_APPROVAL
    return OnboardingState.MISSING_DOCUMENTS


@dataclass
class OnboardingSnapshot:
    """A derived state together with the inputs it was derived from."""

    state: OnboardingState
    compliance: ComplianceStatus
    documents: list[Document]


class OnboardingStageReader:
    """Loads a company's ledger and derives its onboarding state."""

    def __init__(self, evaluator: ComplianceEvaluator) -> None:
        self._evaluator = evaluator

    async def read(self, company: CompanyProfile, today: date) -> OnboardingSnapshot:
        compliance, documents = await self._evaluator.evaluate_with_documents(company.id or 0)
        state = derive_onboarding_state(compliance, company.renewal_date, documents, today)
        return OnboardingSnapshot(state=state, compliance=compliance, documents=documents)


def utc_today() -> date:
    """Current calendar day in UTC."""
    return datetime.now(UTC).date()
