"""Read-side use cases over a company's document ledger."""

from kycgate.application.use_cases.access import ensure_can_act, load_company
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.document import Document
from kycgate.core.exceptions import DocumentNotFoundError
from kycgate.core.interfaces.storage import ICompanyStore, IDocumentLedger


class ListCompanyDocumentsUseCase:
    """List every document a company has submitted, superseded ones included."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        ledger: IDocumentLedger | None = None,
    ):
        self._company_store = company_store
        self._ledger = ledger

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_ledger(self) -> IDocumentLedger:
        if self._ledger is None:
            from kycgate.infrastructure.storage.sqlite import get_document_ledger

            self._ledger = await get_document_ledger()
        return self._ledger

    async def execute(self, company_id: int, actor: Actor | None = None) -> list[Document]:
        await load_company(await self._get_company_store(), company_id, actor)
        ledger = await self._get_ledger()
        return await ledger.list_by_company(company_id)


class GetDocumentUseCase:
    """Fetch a single document within the actor's scope."""

    def __init__(self, ledger: IDocumentLedger | None = None):
        self._ledger = ledger

    async def _get_ledger(self) -> IDocumentLedger:
        if self._ledger is None:
            from kycgate.infrastructure.storage.sqlite import get_document_ledger

            self._ledger = await get_document_ledger()
        return self._ledger

    async def execute(self, document_id: int, actor: Actor | None = None) -> Document:
        ledger = await self._get_ledger()
        document = await ledger.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        ensure_can_act(actor, document.company_id)
        return document
