"""Application use cases."""

from kycgate.application.use_cases.audit_trail import GetAuditTrailUseCase
from kycgate.application.use_cases.check_renewals import CheckRenewalsUseCase, RenewalCheckResult
from kycgate.application.use_cases.company_documents import (
    GetDocumentUseCase,
    ListCompanyDocumentsUseCase,
)
from kycgate.application.use_cases.get_compliance_status import GetComplianceStatusUseCase
from kycgate.application.use_cases.get_onboarding_state import (
    GetOnboardingStateUseCase,
    OnboardingStateResult,
)
from kycgate.application.use_cases.manage_companies import (
    CompanyChangeResult,
    ManageCompaniesUseCase,
)
from kycgate.application.use_cases.manage_requirements import ManageRequirementsUseCase
from kycgate.application.use_cases.request_upload_slot import (
    RequestUploadSlotUseCase,
    UploadSlotResult,
)
from kycgate.application.use_cases.review_document import (
    ReviewDocumentResult,
    ReviewDocumentUseCase,
)

__all__ = [
    "ReviewDocumentUseCase",
    "ReviewDocumentResult",
    "GetComplianceStatusUseCase",
    "GetOnboardingStateUseCase",
    "OnboardingStateResult",
    "ListCompanyDocumentsUseCase",
    "GetDocumentUseCase",
    "RequestUploadSlotUseCase",
    "UploadSlotResult",
    "ManageRequirementsUseCase",
    "ManageCompaniesUseCase",
    "CompanyChangeResult",
    "CheckRenewalsUseCase",
    "RenewalCheckResult",
    "GetAuditTrailUseCase",
]
