"""
Compliance requirement administration endpoints.
"""

from fastapi import APIRouter, Depends, status

from kycgate.api.dependencies import get_requirements_use_case
from kycgate.api.routes.serializers import requirement_to_response
from kycgate.application.dto.requests import CreateRequirementRequest
from kycgate.application.dto.responses import (
    ErrorResponse,
    RequirementListResponse,
    RequirementResponse,
)
from kycgate.application.use_cases import ManageRequirementsUseCase

router = APIRouter(prefix="/api/requirements", tags=["requirements"])


@router.get("", response_model=RequirementListResponse)
async def list_requirements(
    use_case: ManageRequirementsUseCase = Depends(get_requirements_use_case),
) -> RequirementListResponse:
    """List required document types."""
    requirements = await use_case.list_requirements()
    return RequirementListResponse(
        requirements=[requirement_to_response(r) for r in requirements],
        total=len(requirements),
    )


@router.post(
    "",
    response_model=RequirementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_requirement(
    request: CreateRequirementRequest,
    use_case: ManageRequirementsUseCase = Depends(get_requirements_use_case),
) -> RequirementResponse:
    """Require a document type from every company."""
    created = await use_case.create_requirement(
        request.document_type,
        name=request.name,
        description=request.description,
    )
    return requirement_to_response(created)


@router.delete(
    "/{document_type}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_requirement(
    document_type: str,
    use_case: ManageRequirementsUseCase = Depends(get_requirements_use_case),
) -> None:
    """Stop requiring a document type."""
    await use_case.delete_requirement(document_type)
