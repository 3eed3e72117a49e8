"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
"""

from datetime import date

from pydantic import BaseModel, Field

from kycgate.core.entities.company import OnboardingStatus


class CreateRequirementRequest(BaseModel):
    """Register a document type as required for compliance."""

    document_type: str = Field(
        ...,
        description="Document type to require",
        examples=["AADHAAR", "PAN"],
    )
    name: str | None = Field(default=None, description="Display name")
    description: str | None = Field(default=None, description="What the document must show")


class CreateCompanyRequest(BaseModel):
    """Register a company for onboarding."""

    company_name: str = Field(..., min_length=1, max_length=255, description="Legal name")
    contact_email: str = Field(..., min_length=3, max_length=255, description="Contact email")
    renewal_date: date | None = Field(default=None, description="Contract renewal date")
    notes: str | None = Field(default=None, description="Internal notes")


class UpdateRenewalRequest(BaseModel):
    """Set or clear a company's renewal date."""

    renewal_date: date | None = Field(
        default=None,
        description="New renewal date; null clears it",
        examples=["2027-01-31"],
    )


class ChangeStatusRequest(BaseModel):
    """Manual onboarding status change."""

    status: OnboardingStatus = Field(..., description="Target onboarding status")


class ReviewDocumentRequest(BaseModel):
    """Administrator decision on a document."""

    decision: str = Field(
        ...,
        description="APPROVE or REJECT",
        examples=["APPROVE", "REJECT"],
    )
    rejection_reason: str | None = Field(
        default=None,
        max_length=2000,
        description="Required when rejecting; shown to the company",
    )
    admin_remarks: str | None = Field(
        default=None,
        max_length=2000,
        description="Internal note, not shown to the company",
    )


class UploadSlotRequest(BaseModel):
    """Declared metadata of a file the company is about to upload."""

    document_type: str = Field(..., description="Document type", examples=["PAN"])
    file_name: str = Field(..., min_length=1, max_length=255, description="Original file name")
    file_size: int = Field(..., description="File size in bytes")
    mime_type: str | None = Field(default=None, description="Declared MIME type")
    replaces_document_id: int | None = Field(
        default=None,
        description="Document this upload supersedes (same company and type)",
    )
