"""
Compliance evaluation.

A company is compliant when every required document type has at least one
VERIFIED document. The result is derived on every call and never stored.
"""

from __future__ import annotations

from collections.abc import Iterable

from kycgate.config import get_logger
from kycgate.core.entities.compliance import ComplianceStatus
from kycgate.core.entities.document import Document, DocumentType
from kycgate.core.interfaces.storage import IDocumentLedger, IRequirementRegistry

logger = get_logger(__name__)


def _ordered(types: Iterable[DocumentType]) -> list[DocumentType]:
    return sorted(types, key=lambda t: t.value)


def evaluate_compliance(
    company_id: int,
    required_types: Iterable[DocumentType],
    documents: Iterable[Document],
) -> ComplianceStatus:
    """
    Evaluate compliance over a ledger snapshot.

    Only the presence of a currently VERIFIED document counts. Rejected or
    still-uploaded documents of the same type neither help nor hurt.

    Args:
        company_id: Company the snapshot belongs to.
        required_types: Requirement registry snapshot.
        documents: The company's documents (any status).

    Returns:
        ComplianceStatus with sorted type lists.
    """
    required = set(required_types)
    approved = {d.document_type for d in documents if d.is_verified}
    missing = required - approved

    return ComplianceStatus(
        company_id=company_id,
        required_document_types=_ordered(required),
        approved_document_types=_ordered(approved),
        missing_document_types=_ordered(missing),
        is_compliant=not missing,
    )


class ComplianceEvaluator:
    """Evaluates a company against the current registry and ledger."""

    def __init__(
        self,
        registry: IRequirementRegistry,
        ledger: IDocumentLedger,
    ) -> None:
        self._registry = registry
        self._ledger = ledger

    async def evaluate(self, company_id: int) -> ComplianceStatus:
        """Evaluate compliance. Unknown companies evaluate over an empty ledger."""
        compliance, _ = await self.evaluate_with_documents(company_id)
        return compliance

    async def evaluate_with_documents(
        self, company_id: int
    ) -> tuple[ComplianceStatus, list[Document]]:
        """Evaluate compliance and also return the ledger snapshot it used."""
        required = await self._registry.list_required_types()
        documents = await self._ledger.list_by_company(company_id)
        compliance = evaluate_compliance(company_id, required, documents)

        logger.debug(
            "compliance_evaluated",
            company_id=company_id,
            required=len(compliance.required_document_types),
            missing=[t.value for t in compliance.missing_document_types],
            is_compliant=compliance.is_compliant,
        )
        return compliance, documents
