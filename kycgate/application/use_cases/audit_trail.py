"""Read side of the audit trail."""

from kycgate.application.use_cases.access import load_company
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.audit import AuditEntry
from kycgate.core.interfaces.storage import IAuditLog, ICompanyStore


class GetAuditTrailUseCase:
    """A company's recorded decisions, oldest first."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        audit_log: IAuditLog | None = None,
    ):
        self._company_store = company_store
        self._audit_log = audit_log

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_audit_log(self) -> IAuditLog:
        if self._audit_log is None:
            from kycgate.infrastructure.storage.sqlite import get_audit_log

            self._audit_log = await get_audit_log()
        return self._audit_log

    async def execute(
        self,
        company_id: int,
        actor: Actor | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[AuditEntry]:
        await load_company(await self._get_company_store(), company_id, actor)
        audit_log = await self._get_audit_log()
        return await audit_log.list_for_company(company_id, limit=limit, offset=offset)
