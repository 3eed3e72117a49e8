"""KYC document entity and review vocabulary."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class DocumentType(str, Enum):
    """Type of KYC document."""

    AADHAAR = "AADHAAR"
    PAN = "PAN"
    KYC = "KYC"
    CONTRACT = "CONTRACT"
    LICENSE = "LICENSE"
    CERTIFICATE = "CERTIFICATE"
    IDENTIFICATION = "IDENTIFICATION"
    FINANCIAL = "FINANCIAL"
    OTHER = "OTHER"

    @property
    def is_requirable(self) -> bool:
        """OTHER is reserved for ad-hoc, non-required uploads."""
        return self is not DocumentType.OTHER


class DocumentStatus(str, Enum):
    """Review status of a single document record."""

    UPLOADED = "UPLOADED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    @classmethod
    def _missing_(cls, value: object) -> "DocumentStatus | None":
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized == "PENDING":
                return cls.UPLOADED
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ReviewDecision(str, Enum):
    """Administrator decision on a document."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"


class Document(BaseModel):
    """
    A document submitted by a company.

    Records are never deleted. A re-upload creates a new record that points
    at the one it supersedes through replaces_id.
    """

    id: int | None = None
    company_id: int
    document_type: DocumentType
    status: DocumentStatus = DocumentStatus.UPLOADED
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
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_pending(self) -> bool:
        return self.status == DocumentStatus.UPLOADED

    @property
    def is_verified(self) -> bool:
        return self.status == DocumentStatus.VERIFIED


def parse_document_type(value: "DocumentType | str") -> DocumentType:
    """Coerce a raw type name, raising InvalidDocumentTypeError if unknown."""
    from kycgate.core.exceptions import InvalidDocumentTypeError

    if isinstance(value, DocumentType):
        return value
    try:
        return DocumentType(str(value).strip().upper())
    except ValueError:
        raise InvalidDocumentTypeError(str(value)) from None
