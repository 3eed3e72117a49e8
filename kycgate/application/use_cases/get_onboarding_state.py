"""
Get Onboarding State Use Case.

Backs the client's polling loop: the response tells the client which screen
to show and how long to wait before asking again.
"""

from dataclasses import dataclass
from datetime import date

from kycgate.application.use_cases.access import load_company
from kycgate.config import get_settings
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.company import CompanyProfile
from kycgate.core.entities.compliance import ComplianceStatus, OnboardingState
from kycgate.core.entities.document import Document
from kycgate.core.interfaces.storage import (
    ICompanyStore,
    IDocumentLedger,
    IRequirementRegistry,
)
from kycgate.core.services import OnboardingStageReader, utc_today


@dataclass
class OnboardingStateResult:
    """Derived onboarding state plus what it was derived from."""

    company: CompanyProfile
    state: OnboardingState
    compliance: ComplianceStatus
    documents: list[Document]
    poll_interval_seconds: int
    evaluated_on: date


class GetOnboardingStateUseCase:
    """Derive the client-facing onboarding state for a company."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        registry: IRequirementRegistry | None = None,
        ledger: IDocumentLedger | None = None,
        poll_interval_seconds: int | None = None,
    ):
        self._company_store = company_store
        self._registry = registry
        self._ledger = ledger
        self._poll_interval = poll_interval_seconds

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_reader(self) -> OnboardingStageReader:
        from kycgate.application.services import get_compliance_evaluator, get_stage_reader

        evaluator = await get_compliance_evaluator(registry=self._registry, ledger=self._ledger)
        return await get_stage_reader(evaluator)

    def _get_poll_interval(self) -> int:
        if self._poll_interval is None:
            self._poll_interval = get_settings().onboarding.poll_interval_seconds
        return self._poll_interval

    async def execute(
        self,
        company_id: int,
        actor: Actor | None = None,
        today: date | None = None,
    ) -> OnboardingStateResult:
        """
        Derive the onboarding state.

        Args:
            company_id: Company to inspect.
            actor: Acting caller.
            today: Calendar day to compare renewal against (default: UTC today).

        Raises:
            ForbiddenError, CompanyNotFoundError
        """
        today = today or utc_today()
        company = await load_company(await self._get_company_store(), company_id, actor)
        reader = await self._get_reader()
        snapshot = await reader.read(company, today)

        return OnboardingStateResult(
            company=company,
            state=snapshot.state,
            compliance=snapshot.compliance,
            documents=snapshot.documents,
            poll_interval_seconds=self._get_poll_interval(),
            evaluated_on=today,
        )
