"""Compliance requirement entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from kycgate.core.entities.document import DocumentType


class ComplianceRequirement(BaseModel):
    """A document type every company must have approved to be compliant."""

    id: int | None = None
    document_type: DocumentType
    name: str | None = None
    description: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
