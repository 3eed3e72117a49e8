"""
Company onboarding endpoints.

Read endpoints are side-effect free and safe to poll.
"""

from fastapi import APIRouter, Depends, Query, status

from kycgate.api.dependencies import (
    get_actor,
    get_audit_trail_use_case,
    get_check_renewals_use_case,
    get_companies_use_case,
    get_compliance_status_use_case,
    get_list_documents_use_case,
    get_onboarding_state_use_case,
    get_upload_slot_use_case,
)
from kycgate.api.routes.serializers import (
    audit_entry_to_response,
    company_to_response,
    compliance_to_response,
    document_to_response,
)
from kycgate.application.dto.requests import (
    ChangeStatusRequest,
    CreateCompanyRequest,
    UpdateRenewalRequest,
    UploadSlotRequest,
)
from kycgate.application.dto.responses import (
    ActivationResponse,
    AuditLogResponse,
    CompanyChangeResponse,
    CompanyListResponse,
    CompanyResponse,
    ComplianceStatusResponse,
    DocumentListResponse,
    ErrorResponse,
    OnboardingStateResponse,
    RenewalCheckResponse,
    UploadSlotResponse,
)
from kycgate.application.use_cases import (
    CheckRenewalsUseCase,
    CompanyChangeResult,
    GetAuditTrailUseCase,
    GetComplianceStatusUseCase,
    GetOnboardingStateUseCase,
    ListCompanyDocumentsUseCase,
    ManageCompaniesUseCase,
    RequestUploadSlotUseCase,
)
from kycgate.core.entities import Actor, OnboardingStatus

router = APIRouter(prefix="/api/companies", tags=["companies"])


def _change_to_response(result: CompanyChangeResult) -> CompanyChangeResponse:
    return CompanyChangeResponse(
        company=company_to_response(result.company),
        previous_state=result.previous_state.value,
        onboarding_state=result.onboarding_state.value,
        stage_changed=result.stage_changed,
    )


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    request: CreateCompanyRequest,
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> CompanyResponse:
    """Register a company; it starts in PENDING."""
    company = await use_case.create_company(
        company_name=request.company_name,
        contact_email=request.contact_email,
        renewal_date=request.renewal_date,
        notes=request.notes,
    )
    return company_to_response(company)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    onboarding_status: OnboardingStatus | None = None,
    limit: int = 100,
    offset: int = 0,
    actor: Actor = Depends(get_actor),
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> CompanyListResponse:
    """List companies, optionally filtered by onboarding status."""
    companies = await use_case.list_companies(
        status=onboarding_status, limit=limit, offset=offset, actor=actor
    )
    return CompanyListResponse(
        companies=[company_to_response(c) for c in companies],
        total=len(companies),
    )


@router.post("/check-renewals", response_model=RenewalCheckResponse)
async def check_renewals(
    use_case: CheckRenewalsUseCase = Depends(get_check_renewals_use_case),
) -> RenewalCheckResponse:
    """Expire active companies whose renewal date has passed.

    Also sends the configured renewal reminders to active companies whose
    renewal date is approaching.
    """
    result = await use_case.execute()
    return RenewalCheckResponse(
        checked=result.checked,
        expired=result.expired,
        skipped=result.skipped,
        failed=result.failed,
        expired_company_ids=result.expired_company_ids,
        reminders_sent=result.reminders_sent,
        reminded_company_ids=result.reminded_company_ids,
    )


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_company(
    company_id: int,
    actor: Actor = Depends(get_actor),
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> CompanyResponse:
    """Get a company profile."""
    return company_to_response(await use_case.get_company(company_id, actor=actor))


@router.put(
    "/{company_id}/renewal",
    response_model=CompanyChangeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_renewal(
    company_id: int,
    request: UpdateRenewalRequest,
    actor: Actor = Depends(get_actor),
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> CompanyChangeResponse:
    """Set or clear the renewal date."""
    result = await use_case.set_renewal_date(company_id, request.renewal_date, actor=actor)
    return _change_to_response(result)


@router.put(
    "/{company_id}/status",
    response_model=CompanyChangeResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def change_status(
    company_id: int,
    request: ChangeStatusRequest,
    actor: Actor = Depends(get_actor),
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> CompanyChangeResponse:
    """Manually change the onboarding status."""
    result = await use_case.change_status(company_id, request.status, actor=actor)
    return _change_to_response(result)


@router.post(
    "/{company_id}/activate",
    response_model=ActivationResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def activate_company(
    company_id: int,
    actor: Actor = Depends(get_actor),
    use_case: ManageCompaniesUseCase = Depends(get_companies_use_case),
) -> ActivationResponse:
    """Re-run the activation trigger; a no-op unless the company is compliant and PENDING."""
    result = await use_case.activate(company_id, actor=actor)
    return ActivationResponse(
        company=company_to_response(result.company),
        compliance=compliance_to_response(result.compliance),
        outcome=result.outcome.value,
        activated=result.activated,
    )


@router.get(
    "/{company_id}/audit-log",
    response_model=AuditLogResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_audit_log(
    company_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_actor),
    use_case: GetAuditTrailUseCase = Depends(get_audit_trail_use_case),
) -> AuditLogResponse:
    """Recorded review, activation, status and renewal decisions, oldest first."""
    entries = await use_case.execute(company_id, actor=actor, limit=limit, offset=offset)
    return AuditLogResponse(
        entries=[audit_entry_to_response(e) for e in entries],
        total=len(entries),
    )


@router.get(
    "/{company_id}/compliance",
    response_model=ComplianceStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_compliance(
    company_id: int,
    actor: Actor = Depends(get_actor),
    use_case: GetComplianceStatusUseCase = Depends(get_compliance_status_use_case),
) -> ComplianceStatusResponse:
    """Compliance snapshot: required, approved and missing document types."""
    compliance = await use_case.execute(company_id, actor=actor)
    return compliance_to_response(compliance)


@router.get(
    "/{company_id}/onboarding-state",
    response_model=OnboardingStateResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_onboarding_state(
    company_id: int,
    actor: Actor = Depends(get_actor),
    use_case: GetOnboardingStateUseCase = Depends(get_onboarding_state_use_case),
) -> OnboardingStateResponse:
    """Derived onboarding state for client routing and polling."""
    result = await use_case.execute(company_id, actor=actor)
    return OnboardingStateResponse(
        company_id=company_id,
        state=result.state.value,
        onboarding_status=result.company.onboarding_status.value,
        renewal_date=result.company.renewal_date,
        compliance=compliance_to_response(result.compliance),
        poll_interval_seconds=result.poll_interval_seconds,
        evaluated_on=result.evaluated_on,
    )


@router.get(
    "/{company_id}/documents",
    response_model=DocumentListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_company_documents(
    company_id: int,
    actor: Actor = Depends(get_actor),
    use_case: ListCompanyDocumentsUseCase = Depends(get_list_documents_use_case),
) -> DocumentListResponse:
    """Every document the company submitted, oldest first."""
    documents = await use_case.execute(company_id, actor=actor)
    return DocumentListResponse(
        documents=[document_to_response(d) for d in documents],
        total=len(documents),
    )


@router.post(
    "/{company_id}/documents/upload-slot",
    response_model=UploadSlotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def request_upload_slot(
    company_id: int,
    request: UploadSlotRequest,
    actor: Actor = Depends(get_actor),
    use_case: RequestUploadSlotUseCase = Depends(get_upload_slot_use_case),
) -> UploadSlotResponse:
    """Record a new document and return a presigned URL to upload it to."""
    result = await use_case.execute(
        company_id,
        document_type=request.document_type,
        file_name=request.file_name,
        file_size=request.file_size,
        mime_type=request.mime_type,
        replaces_document_id=request.replaces_document_id,
        actor=actor,
    )
    return UploadSlotResponse(
        document=document_to_response(result.document),
        upload_url=result.upload_url,
        method=result.method,
        expires_in=result.expires_in,
    )
