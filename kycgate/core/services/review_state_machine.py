"""
Document review state machine.

    UPLOADED -> VERIFIED | REJECTED
    REJECTED -> VERIFIED | REJECTED   (decision correction in place)
    VERIFIED -> (terminal)

A re-upload after rejection is a new record with its own chain; the rejected
record stays in the ledger untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from kycgate.config import get_logger
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.entities.document import Document, DocumentStatus, ReviewDecision
from kycgate.core.exceptions import (
    ConcurrentModificationError,
    DocumentNotFoundError,
    DocumentNotReviewableError,
    ForbiddenError,
    InvalidReviewDecisionError,
    RejectionReasonRequiredError,
)
from kycgate.core.interfaces.storage import IDocumentLedger

logger = get_logger(__name__)

REVIEWABLE_STATUSES: frozenset[DocumentStatus] = frozenset(
    {DocumentStatus.UPLOADED, DocumentStatus.REJECTED}
)

DECISION_TARGETS: dict[ReviewDecision, DocumentStatus] = {
    ReviewDecision.APPROVE: DocumentStatus.VERIFIED,
    ReviewDecision.REJECT: DocumentStatus.REJECTED,
}


@dataclass(frozen=True)
class ReviewPlan:
    """Validated transition for a single document."""

    document_id: int
    previous_status: DocumentStatus
    new_status: DocumentStatus
    rejection_reason: str | None


def parse_decision(decision: ReviewDecision | str) -> ReviewDecision:
    """Coerce a raw decision, raising InvalidReviewDecisionError if unknown."""
    if isinstance(decision, ReviewDecision):
        return decision
    try:
        return ReviewDecision(str(decision).strip().upper())
    except ValueError:
        raise InvalidReviewDecisionError(str(decision)) from None


def normalize_reason(reason: str | None) -> str | None:
    """Trim a free-text reason; blank becomes None."""
    if reason is None:
        return None
    reason = reason.strip()
    return reason or None


def is_reviewable(status: DocumentStatus) -> bool:
    return status in REVIEWABLE_STATUSES


def plan_review(
    document: Document,
    decision: ReviewDecision | str,
    rejection_reason: str | None = None,
) -> ReviewPlan:
    """
    Validate a decision against a document without touching storage.

    Raises:
        InvalidReviewDecisionError: decision is not APPROVE or REJECT.
        DocumentNotReviewableError: document is VERIFIED.
        RejectionReasonRequiredError: REJECT with a missing or blank reason.
    """
    parsed = parse_decision(decision)
    document_id = document.id or 0

    if not is_reviewable(document.status):
        raise DocumentNotReviewableError(document_id, document.status.value)

    reason = None
    if parsed == ReviewDecision.REJECT:
        reason = normalize_reason(rejection_reason)
        if reason is None:
            raise RejectionReasonRequiredError(document_id)

    return ReviewPlan(
        document_id=document_id,
        previous_status=document.status,
        new_status=DECISION_TARGETS[parsed],
        rejection_reason=reason,
    )


class DocumentReviewService:
    """Applies administrator decisions to documents in the ledger."""

    def __init__(self, ledger: IDocumentLedger) -> None:
        self._ledger = ledger

    async def review(
        self,
        document_id: int,
        decision: ReviewDecision | str,
        rejection_reason: str | None = None,
        actor: Actor | None = None,
        admin_remarks: str | None = None,
    ) -> Document:
        """
        Review a document.

        The write is guarded by the status the document had when it was read,
        so a concurrent review of the same document fails instead of being
        overwritten.

        Args:
            document_id: Document to review.
            decision: APPROVE or REJECT.
            rejection_reason: Required for REJECT, ignored for APPROVE.
            actor: Acting administrator; checked against the document's company.
            admin_remarks: Optional internal note stored with the review.

        Returns:
            The updated document.

        Raises:
            DocumentNotFoundError, ForbiddenError, InvalidReviewDecisionError,
            DocumentNotReviewableError, RejectionReasonRequiredError,
            ConcurrentModificationError
        """
        document = await self._ledger.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        if actor is not None and not actor.can_act_on(document.company_id):
            raise ForbiddenError(document.company_id, actor.actor_id)

        plan = plan_review(document, decision, rejection_reason)
        remarks = normalize_reason(admin_remarks)
        reviewed_by = actor.actor_id if actor else None

        updated = await self._ledger.record_review(
            document_id=document_id,
            expected_status=plan.previous_status,
            new_status=plan.new_status,
            rejection_reason=plan.rejection_reason,
            admin_remarks=remarks,
            reviewed_by=reviewed_by,
            reviewed_at=datetime.now(UTC),
            audit=AuditEntry(
                company_id=document.company_id,
                action=AuditAction.DOCUMENT_REVIEWED,
                entity_type=AuditEntityType.DOCUMENT,
                entity_id=document_id,
                actor_id=reviewed_by,
                details={
                    "document_type": document.document_type.value,
                    "previous_status": plan.previous_status.value,
                    "status": plan.new_status.value,
                    "rejection_reason": plan.rejection_reason,
                    "admin_remarks": remarks,
                },
            ),
        )
        if updated is None:
            logger.warning(
                "document_review_conflict",
                document_id=document_id,
                expected_status=plan.previous_status.value,
            )
            raise ConcurrentModificationError("Document", document_id)

        logger.info(
            "document_reviewed",
            document_id=document_id,
            company_id=updated.company_id,
            document_type=updated.document_type.value,
            previous_status=plan.previous_status.value,
            status=updated.status.value,
            reviewed_by=updated.reviewed_by,
        )
        return updated
