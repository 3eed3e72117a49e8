"""Core domain entities."""

from kycgate.core.entities.actor import Actor
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.entities.company import (
    ALLOWED_STATUS_TRANSITIONS,
    CompanyProfile,
    OnboardingStatus,
    can_transition_status,
)
from kycgate.core.entities.compliance import ComplianceStatus, OnboardingState
from kycgate.core.entities.document import (
    Document,
    DocumentStatus,
    DocumentType,
    ReviewDecision,
    parse_document_type,
)
from kycgate.core.entities.notification import Notification, NotificationEvent
from kycgate.core.entities.requirement import ComplianceRequirement

__all__ = [
    # Audit
    "AuditAction",
    "AuditEntityType",
    "AuditEntry",
    # Company
    "CompanyProfile",
    "OnboardingStatus",
    "ALLOWED_STATUS_TRANSITIONS",
    "can_transition_status",
    # Documents
    "Document",
    "DocumentStatus",
    "DocumentType",
    "ReviewDecision",
    "parse_document_type",
    # Requirements
    "ComplianceRequirement",
    # Derived state
    "ComplianceStatus",
    "OnboardingState",
    # Notifications
    "Notification",
    "NotificationEvent",
    # Auth
    "Actor",
]
