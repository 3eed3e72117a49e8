"""
Company administration.

Creating companies, maintaining renewal dates and manual onboarding status
changes. Status changes use the same compare-and-set as activation, so an
administrator and a concurrent review cannot both win.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from kycgate.application.use_cases.access import load_company
from kycgate.config import get_logger
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.entities.company import (
    ALLOWED_STATUS_TRANSITIONS,
    CompanyProfile,
    OnboardingStatus,
    can_transition_status,
)
from kycgate.core.entities.compliance import OnboardingState
from kycgate.core.entities.notification import NotificationEvent
from kycgate.core.exceptions import ConcurrentModificationError, InvalidStatusTransitionError
from kycgate.core.interfaces.notifier import INotifier
from kycgate.core.interfaces.storage import (
    ICompanyStore,
    IDocumentLedger,
    IRequirementRegistry,
)
from kycgate.core.services import (
    ActivationResult,
    OnboardingStageReader,
    publish,
    utc_today,
)

logger = get_logger(__name__)


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class CompanyChangeResult:
    """A company after an administrative change."""

    company: CompanyProfile
    previous_state: OnboardingState
    onboarding_state: OnboardingState

    @property
    def stage_changed(self) -> bool:
        return self.previous_state != self.onboarding_state


class ManageCompaniesUseCase:
    """Administrative operations on company profiles."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        registry: IRequirementRegistry | None = None,
        ledger: IDocumentLedger | None = None,
        notifier: INotifier | None = None,
    ):
        self._company_store = company_store
        self._registry = registry
        self._ledger = ledger
        self._notifier = notifier

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_reader(self) -> OnboardingStageReader:
        from kycgate.application.services import get_compliance_evaluator, get_stage_reader

        evaluator = await get_compliance_evaluator(registry=self._registry, ledger=self._ledger)
        return await get_stage_reader(evaluator)

    def _get_notifier(self) -> INotifier:
        if self._notifier is None:
            from kycgate.infrastructure.notifications import get_notifier

            self._notifier = get_notifier()
        return self._notifier

    async def create_company(
        self,
        company_name: str,
        contact_email: str,
        renewal_date: date | None = None,
        notes: str | None = None,
    ) -> CompanyProfile:
        """Create a company in PENDING status."""
        store = await self._get_company_store()
        company = await store.create(
            CompanyProfile(
                company_name=company_name.strip(),
                contact_email=contact_email.strip(),
                renewal_date=renewal_date,
                notes=notes,
            )
        )
        logger.info("company_registered", company_id=company.id)
        return company

    async def get_company(self, company_id: int, actor: Actor | None = None) -> CompanyProfile:
        return await load_company(await self._get_company_store(), company_id, actor)

    async def list_companies(
        self,
        status: OnboardingStatus | None = None,
        limit: int = 100,
        offset: int = 0,
        actor: Actor | None = None,
    ) -> list[CompanyProfile]:
        store = await self._get_company_store()
        companies = await store.list_companies(status=status, limit=limit, offset=offset)
        if actor is not None:
            companies = [c for c in companies if c.id is not None and actor.can_act_on(c.id)]
        return companies

    async def set_renewal_date(
        self,
        company_id: int,
        renewal_date: date | None,
        actor: Actor | None = None,
        today: date | None = None,
    ) -> CompanyChangeResult:
        """
        Set or clear the renewal date.

        The persisted status is not touched; a lapsed date only shows up in
        the derived state until the renewal check runs.
        """
        today = today or utc_today()
        store = await self._get_company_store()
        company = await load_company(store, company_id, actor)
        reader = await self._get_reader()

        before = await reader.read(company, today)
        updated = await store.update_renewal_date(
            company_id,
            renewal_date,
            audit=AuditEntry(
                company_id=company_id,
                action=AuditAction.RENEWAL_DATE_CHANGED,
                entity_type=AuditEntityType.COMPANY,
                entity_id=company_id,
                actor_id=actor.actor_id if actor else None,
                details={
                    "previous_renewal_date": _iso(company.renewal_date),
                    "renewal_date": _iso(renewal_date),
                },
            ),
        )
        if updated is None:
            raise ConcurrentModificationError("Company", company_id)
        after = await reader.read(updated, today)

        if after.state != before.state:
            await publish(
                self._get_notifier(),
                company_id,
                NotificationEvent.STAGE_CHANGED,
                {"previous_state": before.state.value, "state": after.state.value},
            )

        return CompanyChangeResult(updated, before.state, after.state)

    async def change_status(
        self,
        company_id: int,
        target: OnboardingStatus | str,
        actor: Actor | None = None,
        today: date | None = None,
    ) -> CompanyChangeResult:
        """
        Manually move a company to another onboarding status.

        Raises:
            ForbiddenError, CompanyNotFoundError,
            InvalidStatusTransitionError: not allowed from the current status.
            ConcurrentModificationError: status changed while applying.
        """
        today = today or utc_today()
        target_status = OnboardingStatus(target)
        store = await self._get_company_store()
        company = await load_company(store, company_id, actor)

        current = company.onboarding_status
        if not can_transition_status(current, target_status):
            allowed = [s.value for s in ALLOWED_STATUS_TRANSITIONS.get(current, ())]
            raise InvalidStatusTransitionError(current.value, target_status.value, allowed)

        reader = await self._get_reader()
        before = await reader.read(company, today)

        updated = await store.compare_and_set_status(
            company_id,
            expected_version=company.status_version,
            new_status=target_status,
            activated_at=datetime.now(UTC) if target_status == OnboardingStatus.COMPLETED else None,
            audit=AuditEntry(
                company_id=company_id,
                action=AuditAction.COMPANY_STATUS_CHANGED,
                entity_type=AuditEntityType.COMPANY,
                entity_id=company_id,
                actor_id=actor.actor_id if actor else None,
                details={"previous_status": current.value, "status": target_status.value},
            ),
        )
        if updated is None:
            raise ConcurrentModificationError("Company", company_id)

        after = await reader.read(updated, today)
        logger.info(
            "company_status_overridden",
            company_id=company_id,
            previous_status=current.value,
            status=target_status.value,
            actor_id=actor.actor_id if actor else None,
        )
        await publish(
            self._get_notifier(),
            company_id,
            NotificationEvent.STAGE_CHANGED,
            {
                "previous_status": current.value,
                "status": target_status.value,
                "previous_state": before.state.value,
                "state": after.state.value,
            },
        )
        return CompanyChangeResult(updated, before.state, after.state)

    async def activate(self, company_id: int, actor: Actor | None = None) -> ActivationResult:
        """
        Run the activation trigger for one company.

        Reviews run it on their own; this covers a review whose activation
        step failed after the decision was committed.
        """
        from kycgate.application.services import get_activation_service, get_compliance_evaluator

        store = await self._get_company_store()
        await load_company(store, company_id, actor)
        evaluator = await get_compliance_evaluator(registry=self._registry, ledger=self._ledger)
        service = await get_activation_service(
            company_store=store, evaluator=evaluator, notifier=self._get_notifier()
        )
        return await service.try_activate(company_id)
