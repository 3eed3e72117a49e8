"""Data Transfer Objects for the API layer.

Request DTOs validate incoming API requests; response DTOs structure what
the API returns.
"""

from kycgate.application.dto.requests import (
    ChangeStatusRequest,
    CreateCompanyRequest,
    CreateRequirementRequest,
    ReviewDocumentRequest,
    UpdateRenewalRequest,
    UploadSlotRequest,
)
from kycgate.application.dto.responses import (
    ActivationResponse,
    AuditEntryResponse,
    AuditLogResponse,
    CompanyChangeResponse,
    CompanyListResponse,
    CompanyResponse,
    ComplianceStatusResponse,
    DocumentListResponse,
    DocumentResponse,
    ErrorResponse,
    HealthResponse,
    OnboardingStateResponse,
    ProviderHealthResponse,
    RenewalCheckResponse,
    RequirementListResponse,
    RequirementResponse,
    ReviewDocumentResponse,
    UploadSlotResponse,
)

__all__ = [
    # Requests
    "ChangeStatusRequest",
    "CreateCompanyRequest",
    "CreateRequirementRequest",
    "ReviewDocumentRequest",
    "UpdateRenewalRequest",
    "UploadSlotRequest",
    # Responses
    "ActivationResponse",
    "AuditEntryResponse",
    "AuditLogResponse",
    "CompanyChangeResponse",
    "CompanyListResponse",
    "CompanyResponse",
    "ComplianceStatusResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "ErrorResponse",
    "HealthResponse",
    "OnboardingStateResponse",
    "ProviderHealthResponse",
    "RenewalCheckResponse",
    "RequirementListResponse",
    "RequirementResponse",
    "ReviewDocumentResponse",
    "UploadSlotResponse",
]
