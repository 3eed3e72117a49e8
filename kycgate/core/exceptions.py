"""
Domain exceptions for the onboarding engine.

Every error carries a machine-readable code and structured details so the
API layer can render it without inspecting the message.
"""

from typing import Any


class KYCGateError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Not found
class NotFoundError(KYCGateError):
    """Referenced company, document or requirement does not exist."""

    pass


class CompanyNotFoundError(NotFoundError):
    """Company profile not found."""

    def __init__(self, company_id: int):
        super().__init__(
            f"Company not found: {company_id}",
            code="COMPANY_NOT_FOUND",
            details={"company_id": company_id},
        )


class DocumentNotFoundError(NotFoundError):
    """Document not found in the ledger."""

    def __init__(self, document_id: int):
        super().__init__(
            f"Document not found: {document_id}",
            code="DOCUMENT_NOT_FOUND",
            details={"document_id": document_id},
        )


class RequirementNotFoundError(NotFoundError):
    """Document type is not in the requirement registry."""

    def __init__(self, document_type: str):
        super().__init__(
            f"No compliance requirement for document type: {document_type}",
            code="REQUIREMENT_NOT_FOUND",
            details={"document_type": document_type},
        )


# Authorization
class ForbiddenError(KYCGateError):
    """Caller is not authorized to act on the company."""

    def __init__(self, company_id: int, actor_id: str | None = None):
        super().__init__(
            f"Not authorized to act on company {company_id}",
            code="FORBIDDEN",
            details={"company_id": company_id, "actor_id": actor_id},
        )


# Validation
class ValidationFailedError(KYCGateError):
    """Input failed a domain validation rule."""

    pass


class RejectionReasonRequiredError(ValidationFailedError):
    """REJECT decision submitted without a usable reason."""

    def __init__(self, document_id: int):
        super().__init__(
            "Rejection reason is required when rejecting a document",
            code="REJECTION_REASON_REQUIRED",
            details={"document_id": document_id},
        )


class InvalidDocumentTypeError(ValidationFailedError):
    """Document type is unknown or not allowed here."""

    def __init__(self, document_type: str, reason: str | None = None):
        super().__init__(
            f"Invalid document type: {document_type}" + (f" ({reason})" if reason else ""),
            code="INVALID_DOCUMENT_TYPE",
            details={"document_type": document_type, "reason": reason},
        )


class InvalidReviewDecisionError(ValidationFailedError):
    """Review decision is not APPROVE or REJECT."""

    def __init__(self, decision: str):
        super().__init__(
            f"Invalid review decision: {decision}. Expected APPROVE or REJECT",
            code="INVALID_REVIEW_DECISION",
            details={"decision": decision},
        )


class InvalidUploadError(ValidationFailedError):
    """Upload request violates file constraints."""

    def __init__(self, reason: str, file_name: str | None = None):
        super().__init__(
            f"Invalid upload: {reason}",
            code="INVALID_UPLOAD",
            details={"reason": reason, "file_name": file_name},
        )


class InvalidStatusTransitionError(ValidationFailedError):
    """Administrative status change not allowed from the current status."""

    def __init__(self, current: str, target: str, allowed: list[str]):
        super().__init__(
            f"Invalid onboarding status transition: {current} -> {target}. "
            f"Allowed next statuses: {', '.join(allowed) if allowed else 'none'}",
            code="INVALID_STATUS_TRANSITION",
            details={"current": current, "target": target, "allowed": allowed},
        )


# Conflicts
class ConflictError(KYCGateError):
    """Operation conflicts with the current stored state."""

    pass


class DocumentNotReviewableError(ConflictError):
    """Document is in a terminal status."""

    def __init__(self, document_id: int, status: str):
        super().__init__(
            f"Document {document_id} cannot be reviewed in status {status}",
            code="DOCUMENT_NOT_REVIEWABLE",
            details={"document_id": document_id, "status": status},
        )


class ConcurrentModificationError(ConflictError):
    """Compare-and-set guard lost against a concurrent writer."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently",
            code="CONCURRENT_MODIFICATION",
            details={"entity": entity, "entity_id": entity_id},
        )


class ActivationConflictError(ConflictError):
    """Activation guard detected a concurrent status change."""

    def __init__(self, company_id: int, observed_status: str):
        super().__init__(
            f"Company {company_id} changed to {observed_status} during activation",
            code="ACTIVATION_CONFLICT",
            details={"company_id": company_id, "observed_status": observed_status},
        )


class DuplicateRequirementError(ConflictError):
    """Requirement for this document type already registered."""

    def __init__(self, document_type: str):
        super().__init__(
            f"Compliance requirement for document type {document_type} already exists",
            code="DUPLICATE_REQUIREMENT",
            details={"document_type": document_type},
        )


# Storage
class StorageError(KYCGateError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class UploadProviderError(KYCGateError):
    """Direct-upload provider could not issue a destination."""

    def __init__(self, reason: str):
        super().__init__(
            f"Upload provider error: {reason}",
            code="UPLOAD_PROVIDER_ERROR",
            details={"reason": reason},
        )
