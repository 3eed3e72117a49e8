"""Get Compliance Status Use Case."""

from kycgate.application.use_cases.access import load_company
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.compliance import ComplianceStatus
from kycgate.core.interfaces.storage import (
    ICompanyStore,
    IDocumentLedger,
    IRequirementRegistry,
)
from kycgate.core.services import ComplianceEvaluator


class GetComplianceStatusUseCase:
    """
    Compliance snapshot for one company.

    Read-only and safe to call repeatedly; unlike the bare evaluator it
    refuses unknown companies so the API can answer 404.
    """

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        registry: IRequirementRegistry | None = None,
        ledger: IDocumentLedger | None = None,
    ):
        self._company_store = company_store
        self._registry = registry
        self._ledger = ledger

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_evaluator(self) -> ComplianceEvaluator:
        from kycgate.application.services import get_compliance_evaluator

        return await get_compliance_evaluator(registry=self._registry, ledger=self._ledger)

    async def execute(self, company_id: int, actor: Actor | None = None) -> ComplianceStatus:
        """
        Evaluate compliance for a company.

        Raises:
            ForbiddenError: Actor is scoped away from the company.
            CompanyNotFoundError: Unknown company.
        """
        await load_company(await self._get_company_store(), company_id, actor)
        evaluator = await self._get_evaluator()
        return await evaluator.evaluate(company_id)
