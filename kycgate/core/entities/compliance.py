"""Derived compliance and onboarding state. Never persisted."""

from enum import Enum

from pydantic import BaseModel, Field

from kycgate.core.entities.document import DocumentType


class ComplianceStatus(BaseModel):
    """Snapshot of a company's compliance against the requirement registry."""

    company_id: int
    required_document_types: list[DocumentType] = Field(default_factory=list)
    approved_document_types: list[DocumentType] = Field(default_factory=list)
    missing_document_types: list[DocumentType] = Field(default_factory=list)
    is_compliant: bool = False


class OnboardingState(str, Enum):
    """Client-facing onboarding state used for routing and gating."""

    RENEWAL_EXPIRED = "renewal_expired"
    COMPLIANT = "compliant"
    PENDING_APPROVAL = "pending_approval"
    MISSING_DOCUMENTS = "missing_documents"
