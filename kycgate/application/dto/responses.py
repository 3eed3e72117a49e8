"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class RequirementResponse(BaseModel):
    """Registered compliance requirement."""

    id: int
    document_type: str
    name: str | None = None
    description: str | None = None
    created_at: datetime


class RequirementListResponse(BaseModel):
    requirements: list[RequirementResponse]
    total: int


class CompanyResponse(BaseModel):
    """Company profile response DTO."""

    id: int
    company_name: str
    contact_email: str
    renewal_date: date | None = None
    onboarding_status: str = Field(..., description="PENDING, COMPLETED, REJECTED or EXPIRED")
    activated_at: datetime | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class CompanyListResponse(BaseModel):
    companies: list[CompanyResponse]
    total: int


class CompanyChangeResponse(BaseModel):
    """Company after an administrative change, with the derived stage."""

    company: CompanyResponse
    previous_state: str
    onboarding_state: str
    stage_changed: bool


class DocumentResponse(BaseModel):
    """Document record response DTO."""

    id: int
    company_id: int
    document_type: str
    status: str = Field(..., description="UPLOADED, VERIFIED or REJECTED")
    file_name: str
    file_key: str | None = None
    file_size: int = 0
    mime_type: str | None = None
    rejection_reason: str | None = None
    admin_remarks: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    version: int = 1
    replaces_id: int | None = None
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    documents: list[DocumentResponse]
    total: int


class ComplianceStatusResponse(BaseModel):
    """Compliance snapshot. Derived on every request."""

    company_id: int
    required_document_types: list[str]
    approved_document_types: list[str]
    missing_document_types: list[str]
    is_compliant: bool


class OnboardingStateResponse(BaseModel):
    """Client-facing onboarding state for polling."""

    company_id: int
    state: str = Field(
        ...,
        description="renewal_expired, compliant, pending_approval or missing_documents",
    )
    onboarding_status: str
    renewal_date: date | None = None
    compliance: ComplianceStatusResponse
    poll_interval_seconds: int
    evaluated_on: date


class ReviewDocumentResponse(BaseModel):
    """Outcome of a document review."""

    document: DocumentResponse
    compliance: ComplianceStatusResponse
    previous_state: str
    onboarding_state: str
    stage_changed: bool
    activation_outcome: str | None = Field(
        default=None,
        description="activated, already_active, not_compliant or not_eligible",
    )
    company_activated: bool = False


class ActivationResponse(BaseModel):
    """Outcome of re-running the activation trigger."""

    company: CompanyResponse
    compliance: ComplianceStatusResponse
    outcome: str = Field(..., description="activated, already_active, not_compliant or not_eligible")
    activated: bool


class AuditEntryResponse(BaseModel):
    """One recorded decision."""

    id: int
    company_id: int
    action: str
    entity_type: str
    entity_id: int
    actor_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class AuditLogResponse(BaseModel):
    entries: list[AuditEntryResponse]
    total: int


class UploadSlotResponse(BaseModel):
    """Presigned destination for a direct upload."""

    document: DocumentResponse
    upload_url: str
    method: str = "PUT"
    expires_in: int = Field(..., description="Seconds until the URL expires")


class RenewalCheckResponse(BaseModel):
    """Result of a renewal sweep."""

    checked: int
    expired: int
    skipped: int
    failed: int
    expired_company_ids: list[int] = Field(default_factory=list)
    reminders_sent: int = 0
    reminded_company_ids: list[int] = Field(default_factory=list)


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. DOCUMENT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
