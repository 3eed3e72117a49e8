"""
Activation trigger.

Runs after every document review. A PENDING company that is now compliant is
moved to COMPLETED; nothing else ever happens automatically.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from kycgate.config import get_logger
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.entities.company import CompanyProfile, OnboardingStatus
from kycgate.core.entities.compliance import ComplianceStatus
from kycgate.core.entities.notification import NotificationEvent
from kycgate.core.exceptions import ActivationConflictError, CompanyNotFoundError
from kycgate.core.interfaces.notifier import INotifier
from kycgate.core.interfaces.storage import ICompanyStore
from kycgate.core.services.compliance_evaluator import ComplianceEvaluator
from kycgate.core.services.events import publish

logger = get_logger(__name__)


class ActivationOutcome(str, Enum):
    """What try_activate did."""

    ACTIVATED = "activated"
    ALREADY_ACTIVE = "already_active"
    NOT_COMPLIANT = "not_compliant"
    NOT_ELIGIBLE = "not_eligible"


@dataclass
class ActivationResult:
    """Result of an activation attempt."""

    company_id: int
    outcome: ActivationOutcome
    compliance: ComplianceStatus
    company: CompanyProfile

    @property
    def activated(self) -> bool:
        return self.outcome == ActivationOutcome.ACTIVATED


class ActivationService:
    """
    Flips a company to COMPLETED once it is compliant.

    The status write is a compare-and-set on status_version taken before the
    compliance re-check, so the write only lands if nobody changed the
    company's status in between.
    """

    def __init__(
        self,
        company_store: ICompanyStore,
        evaluator: ComplianceEvaluator,
        notifier: INotifier | None = None,
    ) -> None:
        self._companies = company_store
        self._evaluator = evaluator
        self._notifier = notifier

    async def try_activate(self, company_id: int) -> ActivationResult:
        """
        Activate the company if it is compliant and still PENDING.

        Idempotent: an already COMPLETED company is left alone. Compliance
        loss never regresses the status.

        Raises:
            CompanyNotFoundError: Unknown company.
            ActivationConflictError: Status changed to something other than
                COMPLETED while activating.
        """
        company = await self._companies.get(company_id)
        if company is None:
            raise CompanyNotFoundError(company_id)

        compliance = await self._evaluator.evaluate(company_id)

        if not compliance.is_compliant:
            return ActivationResult(company_id, ActivationOutcome.NOT_COMPLIANT, compliance, company)

        if company.is_active:
            return ActivationResult(company_id, ActivationOutcome.ALREADY_ACTIVE, compliance, company)

        if company.onboarding_status != OnboardingStatus.PENDING:
            logger.info(
                "activation_skipped",
                company_id=company_id,
                status=company.onboarding_status.value,
            )
            return ActivationResult(company_id, ActivationOutcome.NOT_ELIGIBLE, compliance, company)

        updated = await self._companies.compare_and_set_status(
            company_id,
            expected_version=company.status_version,
            new_status=OnboardingStatus.COMPLETED,
            activated_at=datetime.now(UTC),
            audit=AuditEntry(
                company_id=company_id,
                action=AuditAction.COMPANY_ACTIVATED,
                entity_type=AuditEntityType.COMPANY,
                entity_id=company_id,
                details={
                    "previous_status": company.onboarding_status.value,
                    "status": OnboardingStatus.COMPLETED.value,
                    "approved_document_types": [t.value for t in compliance.approved_document_types],
                },
            ),
        )

        if updated is None:
            current = await self._companies.get(company_id)
            if current is not None and current.is_active:
                # A concurrent review activated it first
                return ActivationResult(
                    company_id, ActivationOutcome.ALREADY_ACTIVE, compliance, current
                )
            observed = current.onboarding_status.value if current else "missing"
            logger.warning("activation_conflict", company_id=company_id, observed=observed)
            raise ActivationConflictError(company_id, observed)

        logger.info(
            "company_activated",
            company_id=company_id,
            status_version=updated.status_version,
        )
        await publish(
            self._notifier,
            company_id,
            NotificationEvent.COMPANY_ACTIVATED,
            {
                "company_name": updated.company_name,
                "contact_email": updated.contact_email,
                "activated_at": updated.activated_at.isoformat() if updated.activated_at else None,
            },
        )
        return ActivationResult(company_id, ActivationOutcome.ACTIVATED, compliance, updated)
