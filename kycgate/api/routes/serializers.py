"""Entity to response DTO conversion shared by route modules."""

from kycgate.application.dto.responses import (
    AuditEntryResponse,
    CompanyResponse,
    ComplianceStatusResponse,
    DocumentResponse,
    RequirementResponse,
)
from kycgate.core.entities import (
    AuditEntry,
    CompanyProfile,
    ComplianceRequirement,
    ComplianceStatus,
    Document,
)


def company_to_response(company: CompanyProfile) -> CompanyResponse:
    return CompanyResponse(
        id=company.id or 0,
        company_name=company.company_name,
        contact_email=company.contact_email,
        renewal_date=company.renewal_date,
        onboarding_status=company.onboarding_status.value,
        activated_at=company.activated_at,
        notes=company.notes,
        created_at=company.created_at,
        updated_at=company.updated_at,
    )


def document_to_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id or 0,
        company_id=document.company_id,
        document_type=document.document_type.value,
        status=document.status.value,
        file_name=document.file_name,
        file_key=document.file_key,
        file_size=document.file_size,
        mime_type=document.mime_type,
        rejection_reason=document.rejection_reason,
        admin_remarks=document.admin_remarks,
        reviewed_by=document.reviewed_by,
        reviewed_at=document.reviewed_at,
        version=document.version,
        replaces_id=document.replaces_id,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def compliance_to_response(compliance: ComplianceStatus) -> ComplianceStatusResponse:
    return ComplianceStatusResponse(
        company_id=compliance.company_id,
        required_document_types=[t.value for t in compliance.required_document_types],
        approved_document_types=[t.value for t in compliance.approved_document_types],
        missing_document_types=[t.value for t in compliance.missing_document_types],
        is_compliant=compliance.is_compliant,
    )


def requirement_to_response(requirement: ComplianceRequirement) -> RequirementResponse:
    return RequirementResponse(
        id=requirement.id or 0,
        document_type=requirement.document_type.value,
        name=requirement.name,
        description=requirement.description,
        created_at=requirement.created_at,
    )


def audit_entry_to_response(entry: AuditEntry) -> AuditEntryResponse:
    return AuditEntryResponse(
        id=entry.id or 0,
        company_id=entry.company_id,
        action=entry.action.value,
        entity_type=entry.entity_type.value,
        entity_id=entry.entity_id,
        actor_id=entry.actor_id,
        details=entry.details,
        created_at=entry.created_at,
    )
