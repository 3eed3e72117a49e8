"""
Dependency injection container for FastAPI.

Provides use case instances and the acting administrator to route handlers.
"""

from fastapi import Header, HTTPException, status

from kycgate.application.use_cases import (
    CheckRenewalsUseCase,
    GetAuditTrailUseCase,
    GetComplianceStatusUseCase,
    GetDocumentUseCase,
    GetOnboardingStateUseCase,
    ListCompanyDocumentsUseCase,
    ManageCompaniesUseCase,
    ManageRequirementsUseCase,
    RequestUploadSlotUseCase,
    ReviewDocumentUseCase,
)
from kycgate.core.entities.actor import Actor


# Caller identity
def get_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_companies: str | None = Header(default=None),
) -> Actor:
    """
    Resolve the acting administrator from headers set by the auth gateway.

    X-Actor-Companies is a comma-separated list of company ids the actor may
    act on; when absent the actor is unrestricted.
    """
    company_ids = None
    if x_actor_companies is not None:
        try:
            company_ids = frozenset(
                int(part) for part in x_actor_companies.split(",") if part.strip()
            )
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid X-Actor-Companies header: {x_actor_companies}",
            )
    return Actor(actor_id=x_actor_id, company_ids=company_ids)


# Use case dependencies
def get_review_document_use_case() -> ReviewDocumentUseCase:
    """Get review document use case."""
    return ReviewDocumentUseCase()


def get_compliance_status_use_case() -> GetComplianceStatusUseCase:
    """Get compliance status use case."""
    return GetComplianceStatusUseCase()


def get_onboarding_state_use_case() -> GetOnboardingStateUseCase:
    """Get onboarding state use case."""
    return GetOnboardingStateUseCase()


def get_list_documents_use_case() -> ListCompanyDocumentsUseCase:
    """Get list company documents use case."""
    return ListCompanyDocumentsUseCase()


def get_document_use_case() -> GetDocumentUseCase:
    """Get single document use case."""
    return GetDocumentUseCase()


def get_upload_slot_use_case() -> RequestUploadSlotUseCase:
    """Get upload slot use case."""
    return RequestUploadSlotUseCase()


def get_requirements_use_case() -> ManageRequirementsUseCase:
    """Get requirement administration use case."""
    return ManageRequirementsUseCase()


def get_companies_use_case() -> ManageCompaniesUseCase:
    """Get company administration use case."""
    return ManageCompaniesUseCase()


def get_check_renewals_use_case() -> CheckRenewalsUseCase:
    """Get renewal check use case."""
    return CheckRenewalsUseCase()


def get_audit_trail_use_case() -> GetAuditTrailUseCase:
    """Get audit trail use case."""
    return GetAuditTrailUseCase()
