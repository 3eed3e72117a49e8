"""Outbound notification entity."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NotificationEvent(str, Enum):
    """Events published to the notification collaborator."""

    STAGE_CHANGED = "stage-changed"
    DOCUMENT_APPROVED = "document-approved"
    DOCUMENT_REJECTED = "document-rejected"
    COMPANY_ACTIVATED = "company-activated"
    RENEWAL_REMINDER = "renewal-reminder"


class Notification(BaseModel):
    """A single event addressed to a company's contact."""

    company_id: int
    event: NotificationEvent
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
