"""
Abstract interfaces for storage providers.

Defines contracts for the requirement registry, the document ledger, the
company profile store and the audit log.

Writes that change a status or a renewal date take an optional AuditEntry;
implementations persist it in the same transaction as the change.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime

from kycgate.core.entities.audit import AuditEntry
from kycgate.core.entities.company import CompanyProfile, OnboardingStatus
from kycgate.core.entities.document import Document, DocumentStatus, DocumentType
from kycgate.core.entities.requirement import ComplianceRequirement


class IRequirementRegistry(ABC):
    """
    Abstract interface for the requirement registry.

    Read-only from the engine's point of view; administrators manage it out
    of band through create/delete.
    """

    @abstractmethod
    async def list_required_types(self) -> set[DocumentType]:
        """Return the set of document types required for compliance."""
        pass

    @abstractmethod
    async def list_requirements(self) -> list[ComplianceRequirement]:
        """List registered requirements ordered by document type."""
        pass

    @abstractmethod
    async def get(self, document_type: DocumentType) -> ComplianceRequirement | None:
        """Get the requirement for a document type."""
        pass

    @abstractmethod
    async def create(self, requirement: ComplianceRequirement) -> ComplianceRequirement:
        """Register a requirement. Raises DuplicateRequirementError if present."""
        pass

    @abstractmethod
    async def delete(self, document_type: DocumentType) -> bool:
        """Remove a requirement; return True if one was removed."""
        pass


class IDocumentLedger(ABC):
    """Abstract interface for the per-company document ledger."""

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Append a new document record."""
        pass

    @abstractmethod
    async def get(self, document_id: int) -> Document | None:
        """Get document by ID."""
        pass

    @abstractmethod
    async def list_by_company(self, company_id: int) -> list[Document]:
        """List every document of a company, oldest first."""
        pass

    @abstractmethod
    async def record_review(
        self,
        document_id: int,
        expected_status: DocumentStatus,
        new_status: DocumentStatus,
        rejection_reason: str | None,
        admin_remarks: str | None,
        reviewed_by: str | None,
        reviewed_at: datetime,
        audit: AuditEntry | None = None,
    ) -> Document | None:
        """
        Write a review outcome if the document is still in expected_status.

        Returns the updated document, or None when the guard did not match.
        """
        pass


class ICompanyStore(ABC):
    """Abstract interface for company profiles."""

    @abstractmethod
    async def create(self, company: CompanyProfile) -> CompanyProfile:
        """Create a company profile."""
        pass

    @abstractmethod
    async def get(self, company_id: int) -> CompanyProfile | None:
        """Get company by ID."""
        pass

    @abstractmethod
    async def list_companies(
        self,
        status: OnboardingStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CompanyProfile]:
        """List companies, optionally filtered by onboarding status."""
        pass

    @abstractmethod
    async def list_renewal_lapsed(
        self, today: date, status: OnboardingStatus
    ) -> list[CompanyProfile]:
        """List companies in status whose renewal day is before today."""
        pass

    @abstractmethod
    async def update_renewal_date(
        self,
        company_id: int,
        renewal_date: date | None,
        audit: AuditEntry | None = None,
    ) -> CompanyProfile | None:
        """Set or clear the renewal date."""
        pass

    @abstractmethod
    async def compare_and_set_status(
        self,
        company_id: int,
        expected_version: int,
        new_status: OnboardingStatus,
        activated_at: datetime | None = None,
        audit: AuditEntry | None = None,
    ) -> CompanyProfile | None:
        """
        Write a new status only if status_version still equals expected_version.

        Returns the updated company, or None when the guard did not match.
        """
        pass

    @abstractmethod
    async def list_renewal_upcoming(
        self, today: date, until: date, status: OnboardingStatus
    ) -> list[CompanyProfile]:
        """Companies in status whose renewal day is in (today, until]."""
        pass

    @abstractmethod
    async def claim_renewal_reminder(
        self, company_id: int, renewal_date: date, days_before: int
    ) -> bool:
        """
        Mark a reminder as sent for this renewal date.

        Returns False if it was already claimed, so concurrent sweeps send it once.
        """
        pass

    @abstractmethod
    async def release_renewal_reminder(
        self, company_id: int, renewal_date: date, days_before: int
    ) -> None:
        """Undo a claim whose reminder could not be delivered."""
        pass


class IAuditLog(ABC):
    """
    Read access to the audit trail.

    Entries are only ever written by the guarded store writes they describe.
    """

    @abstractmethod
    async def list_for_company(
        self, company_id: int, limit: int = 100, offset: int = 0
    ) -> list[AuditEntry]:
        """Entries of a company, oldest first."""
        pass
