"""
Document review endpoints.
"""

from fastapi import APIRouter, Depends

from kycgate.api.dependencies import (
    get_actor,
    get_document_use_case,
    get_review_document_use_case,
)
from kycgate.api.routes.serializers import compliance_to_response, document_to_response
from kycgate.application.dto.requests import ReviewDocumentRequest
from kycgate.application.dto.responses import (
    DocumentResponse,
    ErrorResponse,
    ReviewDocumentResponse,
)
from kycgate.application.use_cases import GetDocumentUseCase, ReviewDocumentUseCase
from kycgate.core.entities import Actor

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: int,
    actor: Actor = Depends(get_actor),
    use_case: GetDocumentUseCase = Depends(get_document_use_case),
) -> DocumentResponse:
    """Get a document record."""
    return document_to_response(await use_case.execute(document_id, actor=actor))


@router.post(
    "/{document_id}/review",
    response_model=ReviewDocumentResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def review_document(
    document_id: int,
    request: ReviewDocumentRequest,
    actor: Actor = Depends(get_actor),
    use_case: ReviewDocumentUseCase = Depends(get_review_document_use_case),
) -> ReviewDocumentResponse:
    """
    Approve or reject a document.

    Approving the last missing required document activates the company.
    """
    result = await use_case.execute(
        document_id,
        request.decision,
        rejection_reason=request.rejection_reason,
        actor=actor,
        admin_remarks=request.admin_remarks,
    )
    return ReviewDocumentResponse(
        document=document_to_response(result.document),
        compliance=compliance_to_response(result.compliance),
        previous_state=result.previous_state.value,
        onboarding_state=result.onboarding_state.value,
        stage_changed=result.stage_changed,
        activation_outcome=result.activation.outcome.value if result.activation else None,
        company_activated=result.activated,
    )
