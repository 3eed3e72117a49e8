"""Append-only audit trail of decisions taken on a company and its documents."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AuditAction(str, Enum):
    DOCUMENT_REVIEWED = "document_reviewed"
    COMPANY_ACTIVATED = "company_activated"
    COMPANY_STATUS_CHANGED = "company_status_changed"
    RENEWAL_DATE_CHANGED = "renewal_date_changed"
    RENEWAL_EXPIRED = "renewal_expired"


class AuditEntityType(str, Enum):
    COMPANY = "company"
    DOCUMENT = "document"


class AuditEntry(BaseModel):
    """
    One recorded decision.

    Entries are written in the same transaction as the change they describe
    and are never updated, so an in-place review correction keeps the earlier
    decision here even though the document row only holds the latest one.
    actor_id is None for changes the engine made on its own.
    """

    id: int | None = None
    company_id: int
    action: AuditAction
    entity_type: AuditEntityType
    entity_id: int
    actor_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
