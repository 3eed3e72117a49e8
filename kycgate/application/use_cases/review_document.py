"""
Review Document Use Case.

Applies an administrator decision, then lets the rest of the engine react:
the activation trigger runs for the owning company, the decision is
published, and a stage-changed event follows if the derived onboarding
state moved.
"""

from dataclasses import dataclass
from datetime import date

from kycgate.application.use_cases.access import ensure_can_act, load_company
from kycgate.config import get_logger
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.compliance import ComplianceStatus, OnboardingState
from kycgate.core.entities.document import Document, DocumentStatus, ReviewDecision
from kycgate.core.entities.notification import NotificationEvent
from kycgate.core.exceptions import (
    ActivationConflictError,
    DocumentNotFoundError,
    StorageError,
)
from kycgate.core.interfaces.notifier import INotifier
from kycgate.core.interfaces.storage import (
    ICompanyStore,
    IDocumentLedger,
    IRequirementRegistry,
)
from kycgate.core.services import (
    ActivationResult,
    ActivationService,
    ComplianceEvaluator,
    DocumentReviewService,
    OnboardingStageReader,
    publish,
    utc_today,
)

logger = get_logger(__name__)


@dataclass
class ReviewDocumentResult:
    """Result of reviewing a document."""

    document: Document
    compliance: ComplianceStatus
    previous_state: OnboardingState
    onboarding_state: OnboardingState
    activation: ActivationResult | None = None

    @property
    def stage_changed(self) -> bool:
        return self.previous_state != self.onboarding_state

    @property
    def activated(self) -> bool:
        return self.activation is not None and self.activation.activated


class ReviewDocumentUseCase:
    """Review a document and run the post-review reactions."""

    def __init__(
        self,
        ledger: IDocumentLedger | None = None,
        company_store: ICompanyStore | None = None,
        registry: IRequirementRegistry | None = None,
        notifier: INotifier | None = None,
    ):
        self._ledger = ledger
        self._company_store = company_store
        self._registry = registry
        self._notifier = notifier

    async def _get_ledger(self) -> IDocumentLedger:
        if self._ledger is None:
            from kycgate.infrastructure.storage.sqlite import get_document_ledger

            self._ledger = await get_document_ledger()
        return self._ledger

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_registry(self) -> IRequirementRegistry:
        if self._registry is None:
            from kycgate.infrastructure.storage.sqlite import get_requirement_registry

            self._registry = await get_requirement_registry()
        return self._registry

    def _get_notifier(self) -> INotifier:
        if self._notifier is None:
            from kycgate.infrastructure.notifications import get_notifier

            self._notifier = get_notifier()
        return self._notifier

    async def execute(
        self,
        document_id: int,
        decision: ReviewDecision | str,
        rejection_reason: str | None = None,
        actor: Actor | None = None,
        admin_remarks: str | None = None,
        today: date | None = None,
    ) -> ReviewDocumentResult:
        """
        Review a document.

        Args:
            document_id: Document to review.
            decision: APPROVE or REJECT.
            rejection_reason: Required for REJECT.
            actor: Acting administrator.
            admin_remarks: Optional internal note.
            today: Calendar day used for stage derivation (default: UTC today).

        Returns:
            ReviewDocumentResult with the updated document and derived state.

        Raises:
            DocumentNotFoundError, ForbiddenError, ValidationFailedError,
            ConflictError, StorageError
        """
        ledger = await self._get_ledger()
        companies = await self._get_company_store()
        registry = await self._get_registry()
        notifier = self._get_notifier()
        today = today or utc_today()

        evaluator = ComplianceEvaluator(registry, ledger)
        reader = OnboardingStageReader(evaluator)

        document = await ledger.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        ensure_can_act(actor, document.company_id)

        company = await load_company(companies, document.company_id)
        before = await reader.read(company, today)

        reviewed = await DocumentReviewService(ledger).review(
            document_id,
            decision,
            rejection_reason=rejection_reason,
            actor=actor,
            admin_remarks=admin_remarks,
        )

        activation: ActivationResult | None = None
        try:
            activation = await ActivationService(companies, evaluator, notifier).try_activate(
                reviewed.company_id
            )
        except (ActivationConflictError, StorageError) as e:
            # The review is committed; the next review or an explicit
            # activate call retries
            logger.warning(
                "activation_deferred",
                company_id=reviewed.company_id,
                document_id=document_id,
                error=e.message,
            )

        await self._publish_decision(notifier, reviewed)

        if activation is not None:
            company = activation.company
        after = await reader.read(company, today)

        if after.state != before.state:
            await publish(
                notifier,
                reviewed.company_id,
                NotificationEvent.STAGE_CHANGED,
                {
                    "previous_state": before.state.value,
                    "state": after.state.value,
                    "document_id": document_id,
                },
            )

        logger.info(
            "review_completed",
            document_id=document_id,
            company_id=reviewed.company_id,
            status=reviewed.status.value,
            onboarding_state=after.state.value,
            activated=activation.activated if activation else False,
        )

        return ReviewDocumentResult(
            document=reviewed,
            compliance=after.compliance,
            previous_state=before.state,
            onboarding_state=after.state,
            activation=activation,
        )

    @staticmethod
    async def _publish_decision(notifier: INotifier, document: Document) -> None:
        payload = {
            "document_id": document.id,
            "document_type": document.document_type.value,
            "file_name": document.file_name,
        }
        if document.status == DocumentStatus.VERIFIED:
            await publish(notifier, document.company_id, NotificationEvent.DOCUMENT_APPROVED, payload)
        else:
            payload["rejection_reason"] = document.rejection_reason
            await publish(notifier, document.company_id, NotificationEvent.DOCUMENT_REJECTED, payload)
